"""
Episode Runner - Plays one game from the initial state.

The loop:
1. Ask the state whose turn it is
2. Chance turn: sample from chance_outcomes()
3. Player turn: ask that player's policy for an action
4. Apply the action through the normal validated path
5. Repeat until terminal or the step limit

The runner never bypasses legality checks, so an episode doubles as a
consistency check of the engine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random
from typing import Sequence, TYPE_CHECKING

from ..bots.policy import sample_chance_outcome
from ..engine_core.errors import IllegalActionError

if TYPE_CHECKING:
    from ..bots.policy import BotPolicy
    from ..engine_core.action import PlayerAction
    from ..engine_core.game import Game
    from ..engine_core.state import State

logger = logging.getLogger(__name__)


@dataclass
class EpisodeResult:
    """
    Outcome of one episode.

    `terminal` is False when the runner stopped at max_steps first; the
    returns are then all zero.
    """
    returns: list[float]
    num_moves: int
    terminal: bool
    history: list[PlayerAction] = field(default_factory=list)
    final_state: State | None = None

    @property
    def winner(self) -> int | None:
        """Seat with the strictly highest return, None on a tie."""
        best = max(self.returns)
        leaders = [p for p, value in enumerate(self.returns) if value == best]
        if len(leaders) != 1 or not self.terminal:
            return None
        return leaders[0]


class EpisodeRunner:
    """
    Drives a game with one policy per seat.

    Usage:
        runner = EpisodeRunner(game, [RandomPolicy(1), RandomPolicy(2)], seed=7)
        result = runner.run()
        print(result.returns)
    """

    def __init__(
        self,
        game: Game,
        policies: Sequence[BotPolicy],
        seed: int | None = None,
        max_steps: int | None = None,
    ):
        if len(policies) != game.num_players():
            raise ValueError(
                f"{game} needs {game.num_players()} policies, got {len(policies)}"
            )
        self.game = game
        self.policies = list(policies)
        self.rng = random.Random(seed)
        self.max_steps = max_steps if max_steps is not None else game.max_game_length()

    def run(self, state: State | None = None) -> EpisodeResult:
        """Play from `state` (default: a fresh initial state) until done."""
        if state is None:
            state = self.game.new_initial_state()

        steps = 0
        while not state.is_terminal() and steps < self.max_steps:
            self.step(state)
            steps += 1

        result = EpisodeResult(
            returns=state.returns(),
            num_moves=state.move_number,
            terminal=state.is_terminal(),
            history=state.full_history(),
            final_state=state,
        )
        logger.info(
            "Episode of %s finished after %d moves (terminal=%s, returns=%s)",
            self.game,
            result.num_moves,
            result.terminal,
            result.returns,
        )
        return result

    def step(self, state: State) -> int:
        """Apply one action for whoever is to move; returns the action."""
        if state.is_chance_node():
            action = sample_chance_outcome(state.chance_outcomes(), self.rng)
            state.apply_action(action)
            return action

        player = state.current_player()
        legal = state.legal_actions()
        decision = self.policies[player].select_action(state, legal)
        try:
            state.apply_action(decision.action)
        except IllegalActionError:
            logger.warning(
                "%s chose illegal action %d for player %d",
                self.policies[player].get_name(),
                decision.action,
                player,
            )
            raise
        return decision.action

    def run_many(self, episodes: int) -> list[EpisodeResult]:
        return [self.run() for _ in range(episodes)]
