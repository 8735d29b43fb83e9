"""
boardrules CLI - Command-line interface for the engines.

Usage:
    boardrules list                        List registered games
    boardrules show <game>                 Show a game's initial state
    boardrules simulate <game> [options]   Random self-play episodes

Game arguments accept options, e.g. "2048(rows=3,columns=5)".
"""

import argparse
import logging
import sys

from .engine_core.errors import BoardRulesError


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="boardrules - Rule engines for two-player board games",
        prog="boardrules",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # List command
    subparsers.add_parser("list", help="List registered games")

    # Show command
    show_parser = subparsers.add_parser("show", help="Show a game's initial state")
    show_parser.add_argument("game", help="Game name or game string")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Random self-play")
    simulate_parser.add_argument("game", help="Game name or game string")
    simulate_parser.add_argument("--episodes", "-n", type=int, default=1, help="Number of episodes")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "list":
            cmd_list(args)
        elif args.command == "show":
            cmd_show(args)
        elif args.command == "simulate":
            cmd_simulate(args)
        else:
            parser.print_help()
            sys.exit(1)
    except BoardRulesError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_list(args):
    """List registered games with their default parameters."""
    from .engine_core.registry import game_class, registered_games

    for name in registered_games():
        game = game_class(name)()
        print(f"{name:<8} {game.get_type().long_name:<20} {game}")


def cmd_show(args):
    """Show descriptor facts and the initial state."""
    from .engine_core.registry import load_game

    game = load_game(args.game)
    game_type = game.get_type()
    print(f"Game: {game_type.long_name} [{game}]")
    print(f"Players: {game.num_players()}")
    print(f"Chance: {game_type.chance_mode.value}")
    print(f"Distinct actions: {game.num_distinct_actions()}")
    print(f"Chance outcomes: {game.max_chance_outcomes()}")
    print(f"Max game length: {game.max_game_length()}")
    print(f"Observation shape: {game.observation_tensor_shape()}")
    print(f"Undo: {'yes' if game_type.provides_undo else 'no'}")
    print()
    print(game.new_initial_state())


def cmd_simulate(args):
    """Play random self-play episodes and print their returns."""
    from .bots import RandomPolicy
    from .engine_core.registry import load_game
    from .session import EpisodeRunner

    if args.episodes < 1:
        print("Error: --episodes must be at least 1")
        sys.exit(1)

    game = load_game(args.game)
    seed = args.seed
    policies = [
        RandomPolicy(seed=None if seed is None else seed + seat + 1)
        for seat in range(game.num_players())
    ]
    runner = EpisodeRunner(game, policies, seed=seed)

    wins = [0] * game.num_players()
    draws = 0
    for episode, result in enumerate(runner.run_many(args.episodes), start=1):
        print(f"Episode {episode}: moves={result.num_moves} returns={result.returns}")
        if result.winner is None:
            draws += 1
        else:
            wins[result.winner] += 1

    print(f"\nSummary over {args.episodes} episode(s):")
    for seat, count in enumerate(wins):
        print(f"  Player {seat} wins: {count}")
    print(f"  Draws/unfinished: {draws}")


if __name__ == "__main__":
    main()
