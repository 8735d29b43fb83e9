"""
2048 - Two-player sliding tiles with a chance player.

Key mechanics:
- Players alternate slides; merged values add to the mover's score
- The chance player places a 2 or 4 on an empty cell after each slide
- The game ends when the player to move cannot change the board
- Every ply can be undone exactly

This module contains:
- TwentyFortyEightGame descriptor and TwentyFortyEightParams
- TwentyFortyEightState rule engine with its undo stack
- Direction and ChanceAction codecs
"""

from .actions import (
    ChanceAction,
    Direction,
    FOUR_TILE_PROBABILITY,
    NUM_CHANCE_TILES,
    NUM_DIRECTIONS,
    action_to_chance_action,
    action_to_direction,
    chance_action_to_action,
    direction_to_action,
)
from .game import TwentyFortyEightGame, TwentyFortyEightParams
from .state import (
    NUM_INITIAL_TILES,
    TurnHistoryEntry,
    TwentyFortyEightSnapshot,
    TwentyFortyEightState,
)

__all__ = [
    "ChanceAction",
    "Direction",
    "FOUR_TILE_PROBABILITY",
    "NUM_CHANCE_TILES",
    "NUM_DIRECTIONS",
    "action_to_chance_action",
    "action_to_direction",
    "chance_action_to_action",
    "direction_to_action",
    "TwentyFortyEightGame",
    "TwentyFortyEightParams",
    "NUM_INITIAL_TILES",
    "TurnHistoryEntry",
    "TwentyFortyEightSnapshot",
    "TwentyFortyEightState",
]
