"""
Engine Core - The game-agnostic state machine contract.

The core defines what every rule engine provides:
1. A Game descriptor built from validated parameters
2. A State that generates legal actions and applies them
3. Chance as an explicit player with an outcome distribution
4. Serialization, observation tensors and undo hooks
5. A registry that dispatches game names to descriptors
"""

from .action import (
    ActionsAndProbs,
    PlayerAction,
    rank_action_mixed_base,
    unrank_action_mixed_base,
)
from .errors import (
    BoardRulesError,
    GameOverError,
    IllegalActionError,
    InvalidParametersError,
    SerializationError,
    UndoError,
    UnknownGameError,
)
from .game import ChanceMode, Game, GameKind, GameType, Utility
from .params import GameParameters, parse_game_string
from .registry import game_class, load_game, register_game, registered_games
from .snapshot import StateSnapshot, load_snapshot
from .state import PseudoPlayer, State

__all__ = [
    "ActionsAndProbs",
    "PlayerAction",
    "rank_action_mixed_base",
    "unrank_action_mixed_base",
    "BoardRulesError",
    "GameOverError",
    "IllegalActionError",
    "InvalidParametersError",
    "SerializationError",
    "UndoError",
    "UnknownGameError",
    "ChanceMode",
    "Game",
    "GameKind",
    "GameType",
    "Utility",
    "GameParameters",
    "parse_game_string",
    "game_class",
    "load_game",
    "register_game",
    "registered_games",
    "StateSnapshot",
    "load_snapshot",
    "PseudoPlayer",
    "State",
]
