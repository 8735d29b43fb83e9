"""
Game Descriptor - Immutable per-game configuration and state factory.

A Game is built once from validated parameters and shared read-only by
every State it creates. It answers the static questions a search or
learning framework asks before playing:
- How big is the action space? How many chance outcomes?
- How many players, what utility range, how long can a game last?
- What shape does the observation tensor have?
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from math import prod
from typing import Any, ClassVar, Mapping, TYPE_CHECKING

from .params import GameParameters

if TYPE_CHECKING:
    from .state import State


class GameKind(str, Enum):
    """Tag used by the registry to dispatch to a concrete game."""
    KALAH = "kalah"
    TWENTY_FORTY_EIGHT = "2048"


class ChanceMode(Enum):
    """How randomness enters the game."""
    DETERMINISTIC = "deterministic"
    EXPLICIT_STOCHASTIC = "explicit_stochastic"  # Chance player with published outcomes


class Utility(Enum):
    """Relationship between the players' returns."""
    ZERO_SUM = "zero_sum"
    CONSTANT_SUM = "constant_sum"
    GENERAL_SUM = "general_sum"


@dataclass(frozen=True)
class GameType:
    """
    Static facts about a game.

    Shared by every instance of the game regardless of parameters.
    """
    kind: GameKind
    long_name: str
    chance_mode: ChanceMode
    utility: Utility
    min_num_players: int
    max_num_players: int
    parameters_model: type[GameParameters]
    provides_undo: bool = False
    provides_observation_tensor: bool = True

    @property
    def short_name(self) -> str:
        return self.kind.value


class Game(ABC):
    """
    Abstract game descriptor.

    Subclasses set `game_type` and implement the size/utility queries
    plus the two state factories.
    """

    game_type: ClassVar[GameType]

    def __init__(self, params: Mapping[str, Any] | GameParameters | None = None):
        model = self.game_type.parameters_model
        if isinstance(params, GameParameters):
            params = params.model_dump()
        self._parameters = model.from_mapping(self.game_type.short_name, params)

    @property
    def parameters(self) -> GameParameters:
        """The validated (frozen) parameter model."""
        return self._parameters

    def get_parameters(self) -> dict[str, Any]:
        return self._parameters.model_dump()

    def get_type(self) -> GameType:
        return self.game_type

    @abstractmethod
    def new_initial_state(self) -> State:
        """Create the state at the start of an episode."""

    @abstractmethod
    def deserialize_state(self, data: str) -> State:
        """Rebuild a state from the output of State.serialize()."""

    @abstractmethod
    def num_distinct_actions(self) -> int:
        """Size of the player action space [0, n)."""

    @abstractmethod
    def num_players(self) -> int:
        pass

    @abstractmethod
    def min_utility(self) -> float:
        pass

    @abstractmethod
    def max_utility(self) -> float:
        pass

    @abstractmethod
    def max_game_length(self) -> int:
        """Upper bound on the number of plies, chance plies included."""

    @abstractmethod
    def observation_tensor_shape(self) -> tuple[int, ...]:
        pass

    def utility_sum(self) -> float | None:
        """Sum of all returns for zero/constant-sum games, None otherwise."""
        if self.game_type.utility == Utility.ZERO_SUM:
            return 0.0
        return None

    def max_chance_outcomes(self) -> int:
        """Size of the chance action space [0, n); 0 for deterministic games."""
        return 0

    def observation_tensor_size(self) -> int:
        return prod(self.observation_tensor_shape())

    def __str__(self) -> str:
        options = ",".join(f"{k}={v}" for k, v in self.get_parameters().items())
        return f"{self.game_type.short_name}({options})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.get_parameters()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Game):
            return NotImplemented
        return type(self) is type(other) and self.get_parameters() == other.get_parameters()

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(self.get_parameters().items()))))
