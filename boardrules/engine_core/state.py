"""
Game State - The per-episode state machine shared by every game.

Design principles:
- Mutable: apply_action() and undo_action() change the state in place
- Validated: every applied action must come from legal_actions()
- Observable: chance is an explicit player with a published distribution
- Serializable: states can be saved and restored exactly

Concrete games implement the abstract hooks; the public entry points
(apply_action, undo_action, history) live here so every game enforces
the same contract.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from copy import deepcopy
from enum import IntEnum
import logging
from typing import TYPE_CHECKING

import numpy as np

from .action import ActionsAndProbs, PlayerAction
from .errors import GameOverError, IllegalActionError, UndoError

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)


class PseudoPlayer(IntEnum):
    """Player ids that are not seats at the table."""
    CHANCE = -1
    INVALID = -3
    TERMINAL = -4


class State(ABC):
    """
    Abstract game state.

    Owns the action history and move counter. The board and any
    game-specific trackers live in the subclass.
    """

    def __init__(self, game: Game):
        self._game = game
        self._num_players = game.num_players()
        self._history: list[PlayerAction] = []
        self._move_number = 0

    @property
    def game(self) -> Game:
        return self._game

    @property
    def num_players(self) -> int:
        return self._num_players

    @property
    def move_number(self) -> int:
        """Number of plies applied so far, chance plies included."""
        return self._move_number

    # ------------------------------------------------------------------
    # Turn order
    # ------------------------------------------------------------------

    @abstractmethod
    def current_player(self) -> int:
        """Seat index, PseudoPlayer.CHANCE, or PseudoPlayer.TERMINAL."""

    def is_chance_node(self) -> bool:
        return self.current_player() == PseudoPlayer.CHANCE

    def is_player_node(self) -> bool:
        return self.current_player() >= 0

    @abstractmethod
    def is_terminal(self) -> bool:
        pass

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    @abstractmethod
    def legal_actions(self) -> list[int]:
        """
        Legal actions for the current player, ascending.

        At chance nodes these are the chance outcomes; at terminal states
        the list is empty.
        """

    def legal_actions_mask(self) -> list[int]:
        """0/1 mask over the player or chance action space."""
        if self.is_chance_node():
            size = self._game.max_chance_outcomes()
        else:
            size = self._game.num_distinct_actions()
        mask = [0] * size
        for action in self.legal_actions():
            mask[action] = 1
        return mask

    def chance_outcomes(self) -> ActionsAndProbs:
        """(action, probability) pairs for the chance player."""
        if self.is_terminal():
            raise GameOverError()
        raise ValueError(f"{type(self).__name__} is not at a chance node")

    def legal_chance_outcomes(self) -> list[int]:
        return [action for action, _ in self.chance_outcomes()]

    def apply_action(self, action: int) -> None:
        """
        Apply an action for the current player.

        Raises GameOverError on terminal states and IllegalActionError
        for anything outside legal_actions(). A rejected action leaves
        the state untouched.
        """
        if self.is_terminal():
            raise GameOverError(action)

        action = int(action)
        player = int(self.current_player())
        legal = self.legal_actions()
        if action not in legal:
            raise IllegalActionError(action, player, legal)

        self._do_apply_action(action)
        self._history.append(PlayerAction(player=player, action=action))
        self._move_number += 1
        logger.debug(
            "Applied %s for player %d (move %d)",
            self.action_to_string(player, action),
            player,
            self._move_number,
        )

    @abstractmethod
    def _do_apply_action(self, action: int) -> None:
        """Mutate the state for an action already known to be legal."""

    def undo_action(self, player: int, action: int) -> None:
        """
        Revert the most recent ply.

        (player, action) must match the last history entry exactly.
        """
        if not self._history:
            raise UndoError("No actions to undo")

        last = self._history[-1]
        if last != PlayerAction(player=player, action=action):
            raise UndoError(
                f"Cannot undo ({player}, {action}); last applied was "
                f"({last.player}, {last.action})"
            )

        self._undo_action(player, action)
        self._history.pop()
        self._move_number -= 1
        logger.debug("Undid action %d for player %d", action, player)

    def _undo_action(self, player: int, action: int) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not support undo")

    @abstractmethod
    def action_to_string(self, player: int, action: int) -> str:
        pass

    # ------------------------------------------------------------------
    # Outcome
    # ------------------------------------------------------------------

    @abstractmethod
    def returns(self) -> list[float]:
        """Per-player returns; all zero until the game is over."""

    def player_return(self, player: int) -> float:
        self._check_player(player)
        return self.returns()[player]

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def history(self) -> list[int]:
        return [entry.action for entry in self._history]

    def full_history(self) -> list[PlayerAction]:
        return list(self._history)

    def history_str(self) -> str:
        return ", ".join(str(action) for action in self.history())

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @abstractmethod
    def __str__(self) -> str:
        pass

    def observation_string(self, player: int) -> str:
        """Perfect-information games observe the full rendering."""
        self._check_player(player)
        return str(self)

    @abstractmethod
    def observation_tensor(self, player: int) -> np.ndarray:
        """float32 array shaped like Game.observation_tensor_shape()."""

    def _check_player(self, player: int) -> None:
        if not 0 <= player < self._num_players:
            raise ValueError(
                f"Player {player} out of range [0, {self._num_players})"
            )

    # ------------------------------------------------------------------
    # Copy / persistence
    # ------------------------------------------------------------------

    def clone(self) -> State:
        """Deep copy the state; the descriptor stays shared."""
        return deepcopy(self, {id(self._game): self._game})

    @abstractmethod
    def serialize(self) -> str:
        pass
