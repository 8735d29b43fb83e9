"""
Kalah Game - Descriptor for the six-pit seed sowing game.

Only the starting seed count is configurable; the 14-slot layout is a
fixed convention.
"""

from __future__ import annotations

from pydantic import Field

from ...engine_core.errors import SerializationError
from ...engine_core.game import ChanceMode, Game, GameKind, GameType, Utility
from ...engine_core.params import GameParameters
from ...engine_core.registry import register_game
from ...engine_core.snapshot import load_snapshot
from .state import BOARD_SIZE, MAX_GAME_LENGTH, KalahSnapshot, KalahState

DEFAULT_SEEDS_PER_PIT = 4


class KalahParams(GameParameters):
    """Options accepted by kalah(...)."""
    seeds_per_pit: int = Field(
        DEFAULT_SEEDS_PER_PIT, ge=1, le=24, description="Seeds in each pit at the start"
    )


@register_game
class KalahGame(Game):
    """Kalah descriptor. Actions are slot indices in [0, 14)."""

    game_type = GameType(
        kind=GameKind.KALAH,
        long_name="Kalah",
        chance_mode=ChanceMode.DETERMINISTIC,
        utility=Utility.ZERO_SUM,
        min_num_players=2,
        max_num_players=2,
        parameters_model=KalahParams,
    )

    @property
    def seeds_per_pit(self) -> int:
        return self.parameters.seeds_per_pit

    def new_initial_state(self) -> KalahState:
        return KalahState(self, self.seeds_per_pit)

    def deserialize_state(self, data: str) -> KalahState:
        snapshot = load_snapshot(KalahSnapshot, data, str(self))
        if len(snapshot.board) != BOARD_SIZE:
            raise SerializationError(
                f"Kalah board needs {BOARD_SIZE} slots, got {len(snapshot.board)}"
            )
        if any(seeds < 0 for seeds in snapshot.board):
            raise SerializationError("Kalah board holds a negative seed count")
        if snapshot.current_player not in (0, 1):
            raise SerializationError(f"Invalid current player {snapshot.current_player}")
        return KalahState.from_snapshot(self, snapshot)

    def num_distinct_actions(self) -> int:
        return BOARD_SIZE

    def num_players(self) -> int:
        return 2

    def min_utility(self) -> float:
        return -1.0

    def max_utility(self) -> float:
        return 1.0

    def max_game_length(self) -> int:
        return MAX_GAME_LENGTH

    def observation_tensor_shape(self) -> tuple[int, ...]:
        return (2, BOARD_SIZE)
