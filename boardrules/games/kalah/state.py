"""
Kalah State - Seed sowing on a fixed 14-slot ring.

Board layout (slot indices):

        13  12  11  10   9   8          <- player 1 pits
     0                          7       <- stores (0: player 1, 7: player 0)
         1   2   3   4   5   6          <- player 0 pits

Sowing runs counter-clockwise (ascending index, wrapping at 14) and skips
the opponent's store. The pit opposite pit i is 14 - i.
"""

from __future__ import annotations
import logging
from typing import Sequence, TYPE_CHECKING

import numpy as np

from ...engine_core.action import PlayerAction
from ...engine_core.snapshot import StateSnapshot
from ...engine_core.state import PseudoPlayer, State

if TYPE_CHECKING:
    from .game import KalahGame

logger = logging.getLogger(__name__)

NUM_PITS = 6
BOARD_SIZE = (NUM_PITS + 1) * 2
# Store slot for player 0 and player 1
PLAYER_STORES = (BOARD_SIZE // 2, 0)
MAX_GAME_LENGTH = 1000


class KalahSnapshot(StateSnapshot):
    """Serialized Kalah state."""


def store_of(player: int) -> int:
    return PLAYER_STORES[player]


def player_pits(player: int) -> range:
    """Pit indices owned by a player, ascending."""
    if player == 0:
        return range(1, NUM_PITS + 1)
    return range(BOARD_SIZE // 2 + 1, BOARD_SIZE)


def is_player_pit(player: int, pit: int) -> bool:
    return pit in player_pits(player)


def opposite_pit(pit: int) -> int:
    return BOARD_SIZE - pit


def slot_owner(slot: int) -> int:
    """Player owning a pit or store slot."""
    if 0 < slot <= BOARD_SIZE // 2:
        return 0
    return 1


class KalahState(State):
    """
    Mutable Kalah position.

    Player 0 moves first. Landing the last seed in your own store earns
    another move; landing it in an empty pit of your own captures the
    opposite pit.
    """

    def __init__(self, game: KalahGame, seeds_per_pit: int):
        super().__init__(game)
        self._current_player = 0
        self._board = [seeds_per_pit] * BOARD_SIZE
        for store in PLAYER_STORES:
            self._board[store] = 0

    # -- Board access ------------------------------------------------------

    def board_at(self, index: int) -> int:
        if not 0 <= index < BOARD_SIZE:
            raise IndexError(f"Slot {index} out of range [0, {BOARD_SIZE})")
        return self._board[index]

    def set_board(self, values: Sequence[int]) -> None:
        """
        Replace all 14 slots.

        No invariant checks beyond the length: used to build test
        positions. Legality and termination follow the new board.
        """
        if len(values) != BOARD_SIZE:
            raise ValueError(f"Kalah board needs {BOARD_SIZE} slots, got {len(values)}")
        self._board = list(values)

    @property
    def board(self) -> list[int]:
        return list(self._board)

    def next_pit(self, player: int, pit: int) -> int:
        """Slot after `pit` when `player` is sowing."""
        next_pit = (pit + 1) % BOARD_SIZE
        if next_pit == store_of(1 - player):
            next_pit = (next_pit + 1) % BOARD_SIZE
        return next_pit

    def side_is_empty(self, player: int) -> bool:
        return all(self._board[pit] == 0 for pit in player_pits(player))

    def side_total(self, player: int) -> int:
        """Seeds in the player's store plus their pits."""
        return self._board[store_of(player)] + sum(
            self._board[pit] for pit in player_pits(player)
        )

    # -- State interface ---------------------------------------------------

    def current_player(self) -> int:
        if self.is_terminal():
            return PseudoPlayer.TERMINAL
        return self._current_player

    def legal_actions(self) -> list[int]:
        if self.is_terminal():
            return []
        return [pit for pit in player_pits(self._current_player) if self._board[pit] > 0]

    def _do_apply_action(self, action: int) -> None:
        player = self._current_player
        seeds = self._board[action]
        self._board[action] = 0

        pit = action
        for _ in range(seeds):
            pit = self.next_pit(player, pit)
            self._board[pit] += 1

        # Capture: last seed in an empty own pit facing a non-empty pit
        opposite = opposite_pit(pit)
        if (
            self._board[pit] == 1
            and is_player_pit(player, pit)
            and self._board[opposite] > 0
        ):
            captured = self._board[opposite]
            self._board[store_of(player)] += captured + 1
            self._board[pit] = 0
            self._board[opposite] = 0
            logger.debug("Player %d captured %d seeds from pit %d", player, captured, opposite)

        if pit != store_of(player):
            self._current_player = 1 - player

        if self.side_is_empty(0) or self.side_is_empty(1):
            self._sweep()

    def _sweep(self) -> None:
        """Move every remaining seed into its owner's store."""
        for player in (0, 1):
            remaining = sum(self._board[pit] for pit in player_pits(player))
            if not remaining:
                continue
            self._board[store_of(player)] += remaining
            for pit in player_pits(player):
                self._board[pit] = 0
            logger.debug("Swept %d seeds into player %d's store", remaining, player)

    def is_terminal(self) -> bool:
        if self._move_number >= self._game.max_game_length():
            return True
        return self.side_is_empty(0) or self.side_is_empty(1)

    def returns(self) -> list[float]:
        if not self.is_terminal():
            return [0.0, 0.0]
        totals = (self.side_total(0), self.side_total(1))
        if totals[0] > totals[1]:
            return [1.0, -1.0]
        if totals[0] < totals[1]:
            return [-1.0, 1.0]
        return [0.0, 0.0]

    def action_to_string(self, player: int, action: int) -> str:
        return str(action)

    def __str__(self) -> str:
        sep = "-"
        top = sep + "".join(
            f"{self._board[BOARD_SIZE - 1 - i]}{sep}" for i in range(NUM_PITS)
        )
        middle = f"{self._board[0]}{sep * (NUM_PITS * 2 + 1)}{self._board[BOARD_SIZE // 2]}"
        bottom = sep + "".join(f"{self._board[i + 1]}{sep}" for i in range(NUM_PITS))
        return "\n".join([top, middle, bottom])

    def observation_tensor(self, player: int) -> np.ndarray:
        """
        Two planes over the 14 slots.

        Plane 0 holds the seeds in slots owned by `player`, plane 1 the
        seeds in the opponent's slots.
        """
        self._check_player(player)
        obs = np.zeros(self._game.observation_tensor_shape(), dtype=np.float32)
        for slot, seeds in enumerate(self._board):
            plane = 0 if slot_owner(slot) == player else 1
            obs[plane, slot] = seeds
        return obs

    def serialize(self) -> str:
        snapshot = KalahSnapshot(
            game=str(self._game),
            current_player=self._current_player,
            move_number=self._move_number,
            history=[(entry.player, entry.action) for entry in self._history],
            board=self._board,
        )
        return snapshot.model_dump_json()

    @classmethod
    def from_snapshot(cls, game: KalahGame, snapshot: KalahSnapshot) -> KalahState:
        state = cls(game, seeds_per_pit=0)
        state._board = list(snapshot.board)
        state._current_player = snapshot.current_player
        state._move_number = snapshot.move_number
        state._history = [PlayerAction(player=p, action=a) for p, a in snapshot.history]
        return state
