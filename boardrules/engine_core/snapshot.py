"""
State Snapshots - Pydantic models for state serialization.

serialize() dumps a snapshot to JSON; Game.deserialize_state() validates
it back. The snapshot records the game string so a state cannot be
restored into a descriptor with different parameters.
"""

from __future__ import annotations
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import SerializationError

SnapshotT = TypeVar("SnapshotT", bound="StateSnapshot")


class StateSnapshot(BaseModel):
    """Fields common to every game's snapshot."""

    model_config = ConfigDict(extra="forbid")

    game: str = Field(description="Game string including parameters")
    current_player: int
    move_number: int = Field(ge=0)
    history: list[tuple[int, int]] = Field(
        default_factory=list, description="(player, action) pairs in order"
    )
    board: list[int]


def load_snapshot(model: type[SnapshotT], data: str, game_string: str) -> SnapshotT:
    """
    Parse and validate a serialized state.

    Raises SerializationError on malformed JSON, failed validation, or a
    snapshot taken from a differently configured game.
    """
    try:
        snapshot = model.model_validate_json(data)
    except ValidationError as e:
        raise SerializationError(f"Malformed serialized state: {e}") from e

    if snapshot.game != game_string:
        raise SerializationError(
            f"Serialized state belongs to '{snapshot.game}', not '{game_string}'"
        )
    return snapshot
