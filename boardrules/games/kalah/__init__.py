"""
Kalah - Six-pit seed sowing with captures.

Key mechanics:
- Each player owns six pits and a store
- Sowing skips the opponent's store
- Ending in your own store grants another move
- Ending in an empty own pit captures the opposite pit
- The game ends when one side's pits are empty

This module contains:
- KalahGame descriptor and KalahParams
- KalahState rule engine and layout helpers
"""

from .game import KalahGame, KalahParams, DEFAULT_SEEDS_PER_PIT
from .state import (
    KalahState,
    KalahSnapshot,
    BOARD_SIZE,
    NUM_PITS,
    PLAYER_STORES,
    opposite_pit,
    player_pits,
    store_of,
)

__all__ = [
    "KalahGame",
    "KalahParams",
    "DEFAULT_SEEDS_PER_PIT",
    "KalahState",
    "KalahSnapshot",
    "BOARD_SIZE",
    "NUM_PITS",
    "PLAYER_STORES",
    "opposite_pit",
    "player_pits",
    "store_of",
]
