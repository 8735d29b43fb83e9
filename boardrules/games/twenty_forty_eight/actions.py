"""
2048 Actions - Slide directions, chance placements and their int codecs.

Two action spaces:
- Player actions: the four slide directions, [0, 4)
- Chance actions: (row, column, is_four) placements, ranked mixed-radix
  over (rows, columns, 2), [0, rows * columns * 2)

Both codecs are bijections over their ranges.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum

from ...engine_core.action import rank_action_mixed_base, unrank_action_mixed_base

NUM_DIRECTIONS = 4
# Tile values the chance player can place: 2 and 4
NUM_CHANCE_TILES = 2
FOUR_TILE_PROBABILITY = 0.1


class Direction(IntEnum):
    """Slide directions; the value is the player action id."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def vector(self) -> tuple[int, int]:
        """(row delta, column delta) of one step in this direction."""
        return _VECTORS[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()


_VECTORS = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}


@dataclass(frozen=True)
class ChanceAction:
    """Placement of a new tile by the chance player."""
    row: int
    column: int
    is_four: bool

    @property
    def value(self) -> int:
        return 4 if self.is_four else 2


def direction_to_action(direction: Direction) -> int:
    return int(direction)


def action_to_direction(action: int) -> Direction:
    if not 0 <= action < NUM_DIRECTIONS:
        raise ValueError(f"Player action {action} out of range [0, {NUM_DIRECTIONS})")
    return Direction(action)


def chance_action_to_action(move: ChanceAction, rows: int, columns: int) -> int:
    return rank_action_mixed_base(
        [move.row, move.column, int(move.is_four)],
        [rows, columns, NUM_CHANCE_TILES],
    )


def action_to_chance_action(action: int, rows: int, columns: int) -> ChanceAction:
    row, column, is_four = unrank_action_mixed_base(
        action, [rows, columns, NUM_CHANCE_TILES]
    )
    return ChanceAction(row=row, column=column, is_four=bool(is_four))
