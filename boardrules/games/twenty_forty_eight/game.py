"""
2048 Game - Descriptor for two-player sliding tiles.

Board dimensions are configurable. Player actions are the four slide
directions; the chance player owns a separate action space of
rows * columns * 2 placements.
"""

from __future__ import annotations

from pydantic import Field

from ...engine_core.errors import SerializationError
from ...engine_core.game import ChanceMode, Game, GameKind, GameType, Utility
from ...engine_core.params import GameParameters
from ...engine_core.registry import register_game
from ...engine_core.snapshot import load_snapshot
from ...engine_core.state import PseudoPlayer
from .actions import NUM_CHANCE_TILES, NUM_DIRECTIONS
from .state import MAX_GAME_LENGTH, TwentyFortyEightSnapshot, TwentyFortyEightState

DEFAULT_ROWS = 4
DEFAULT_COLUMNS = 4
MIN_DIMENSION = 2
MAX_DIMENSION = 16


class TwentyFortyEightParams(GameParameters):
    """Options accepted by 2048(...)."""
    rows: int = Field(DEFAULT_ROWS, ge=MIN_DIMENSION, le=MAX_DIMENSION)
    columns: int = Field(DEFAULT_COLUMNS, ge=MIN_DIMENSION, le=MAX_DIMENSION)


@register_game
class TwentyFortyEightGame(Game):
    """2048 descriptor with an explicit chance player and exact undo."""

    game_type = GameType(
        kind=GameKind.TWENTY_FORTY_EIGHT,
        long_name="2048 (two-player)",
        chance_mode=ChanceMode.EXPLICIT_STOCHASTIC,
        utility=Utility.ZERO_SUM,
        min_num_players=2,
        max_num_players=2,
        parameters_model=TwentyFortyEightParams,
        provides_undo=True,
    )

    @property
    def rows(self) -> int:
        return self.parameters.rows

    @property
    def columns(self) -> int:
        return self.parameters.columns

    def new_initial_state(self) -> TwentyFortyEightState:
        return TwentyFortyEightState(self, self.rows, self.columns)

    def deserialize_state(self, data: str) -> TwentyFortyEightState:
        snapshot = load_snapshot(TwentyFortyEightSnapshot, data, str(self))
        size = self.rows * self.columns
        if len(snapshot.board) != size:
            raise SerializationError(
                f"2048 board needs {size} cells, got {len(snapshot.board)}"
            )
        if any(tile < 0 for tile in snapshot.board):
            raise SerializationError("2048 board holds a negative tile")
        if snapshot.current_player not in (0, 1, PseudoPlayer.CHANCE):
            raise SerializationError(f"Invalid current player {snapshot.current_player}")
        if snapshot.next_player not in (0, 1):
            raise SerializationError(f"Invalid next player {snapshot.next_player}")
        if len(snapshot.scores) != 2:
            raise SerializationError(f"Expected 2 scores, got {len(snapshot.scores)}")
        return TwentyFortyEightState.from_snapshot(self, snapshot)

    def num_distinct_actions(self) -> int:
        return NUM_DIRECTIONS

    def max_chance_outcomes(self) -> int:
        return self.rows * self.columns * NUM_CHANCE_TILES

    def num_players(self) -> int:
        return 2

    def min_utility(self) -> float:
        return -1.0

    def max_utility(self) -> float:
        return 1.0

    def max_game_length(self) -> int:
        return MAX_GAME_LENGTH

    def observation_tensor_shape(self) -> tuple[int, ...]:
        # Empty plane plus one plane per power of two up to 2**(cells + 1)
        return (self.rows * self.columns + 2, self.rows, self.columns)
