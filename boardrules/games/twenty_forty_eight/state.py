"""
2048 State - Two-player sliding tiles with an explicit chance player.

Turn structure:
1. The chance player places the two starting tiles
2. Players alternate slides, starting with player 0
3. After every slide the chance player places a 2 (90%) or a 4 (10%)
   on an empty cell; with no empty cell the opponent moves directly

A slide moves every tile as far as it can go in the chosen direction and
merges it into an equal neighbour that has not merged yet this move. The
merged value is added to the mover's score. The game ends when the
player to move has no slide that changes the board; the higher score
wins.

Every ply pushes a TurnHistoryEntry so undo_action() can restore the
previous position exactly.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Sequence, TYPE_CHECKING

import numpy as np

from ...engine_core.action import ActionsAndProbs, PlayerAction
from ...engine_core.errors import GameOverError, UndoError
from ...engine_core.snapshot import StateSnapshot
from ...engine_core.state import PseudoPlayer, State
from .actions import (
    FOUR_TILE_PROBABILITY,
    ChanceAction,
    Direction,
    action_to_chance_action,
    action_to_direction,
    chance_action_to_action,
)

if TYPE_CHECKING:
    from .game import TwentyFortyEightGame

logger = logging.getLogger(__name__)

NUM_INITIAL_TILES = 2
MAX_GAME_LENGTH = 1000


@dataclass(frozen=True)
class TurnHistoryEntry:
    """
    What one ply changed, enough to reverse it.

    previous_cells holds (index, value before the ply) for every cell the
    ply wrote: the placed cell for chance, each slid or merged cell for a
    slide.
    """
    action: int
    player: int
    previous_cells: tuple[tuple[int, int], ...]
    score_gained: int = 0
    next_player: int = 0  # Player queued behind the chance turn before the ply


class TwentyFortyEightSnapshot(StateSnapshot):
    """Serialized 2048 state, undo stack included."""
    next_player: int
    scores: list[int]
    turn_history: list[TurnHistoryEntry]


class TwentyFortyEightState(State):
    """Mutable 2048 position on a rows x columns board."""

    def __init__(self, game: TwentyFortyEightGame, rows: int, columns: int):
        super().__init__(game)
        self._rows = rows
        self._columns = columns
        self._board = [0] * (rows * columns)
        self._current_player = int(PseudoPlayer.CHANCE)
        self._next_player = 0
        self._scores = [0, 0]
        self._turn_history: list[TurnHistoryEntry] = []

    # -- Board access ------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def board(self) -> list[int]:
        return list(self._board)

    def board_at(self, row: int, column: int) -> int:
        self._check_cell(row, column)
        return self._board[row * self._columns + column]

    def set_board(self, row: int, column: int, value: int) -> None:
        """Write one cell without invariant checks."""
        self._check_cell(row, column)
        self._board[row * self._columns + column] = value
        self._settle_chance_turn()

    def set_custom_board(self, values: Sequence[int]) -> None:
        """Replace the whole board (row-major) without invariant checks."""
        size = self._rows * self._columns
        if len(values) != size:
            raise ValueError(f"Board needs {size} cells, got {len(values)}")
        self._board = list(values)
        self._settle_chance_turn()

    def _settle_chance_turn(self) -> None:
        # A chance turn needs an empty cell to place into
        if self._current_player == PseudoPlayer.CHANCE and self.available_cell_count() == 0:
            self._current_player = self._next_player

    def _check_cell(self, row: int, column: int) -> None:
        if not self.within_bounds(row, column):
            raise IndexError(
                f"Cell ({row}, {column}) outside {self._rows}x{self._columns} board"
            )

    def within_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self._rows and 0 <= column < self._columns

    def cell_available(self, row: int, column: int) -> bool:
        return self._board[row * self._columns + column] == 0

    def available_cell_count(self) -> int:
        return self._board.count(0)

    def score(self, player: int) -> int:
        self._check_player(player)
        return self._scores[player]

    @property
    def scores(self) -> list[int]:
        return list(self._scores)

    @property
    def turn_history(self) -> list[TurnHistoryEntry]:
        return list(self._turn_history)

    # -- Slide mechanics ---------------------------------------------------

    def build_traversals(self, direction: Direction) -> tuple[list[int], list[int]]:
        """
        Row and column visiting order for a slide.

        Cells nearest the destination edge are visited first so each tile
        moves into space already vacated by the tiles ahead of it.
        """
        rows = list(range(self._rows))
        columns = list(range(self._columns))
        if direction == Direction.DOWN:
            rows.reverse()
        if direction == Direction.RIGHT:
            columns.reverse()
        return rows, columns

    def find_farthest_position(
        self,
        row: int,
        column: int,
        direction: Direction,
        board: Sequence[int] | None = None,
    ) -> tuple[tuple[int, int], tuple[int, int]]:
        """
        Walk from (row, column) over empty cells.

        Returns (farthest empty-or-start cell, first cell beyond it). The
        second cell may be out of bounds.
        """
        cells = self._board if board is None else board
        d_row, d_column = direction.vector
        previous = (row, column)
        nxt = (row + d_row, column + d_column)
        while self.within_bounds(*nxt) and cells[nxt[0] * self._columns + nxt[1]] == 0:
            previous = nxt
            nxt = (nxt[0] + d_row, nxt[1] + d_column)
        return previous, nxt

    def tile_matches_available(self) -> bool:
        """True if two equal tiles sit next to each other anywhere."""
        for row in range(self._rows):
            for column in range(self._columns):
                tile = self._board[row * self._columns + column]
                if not tile:
                    continue
                for d_row, d_column in (Direction.RIGHT.vector, Direction.DOWN.vector):
                    r, c = row + d_row, column + d_column
                    if self.within_bounds(r, c) and self._board[r * self._columns + c] == tile:
                        return True
        return False

    def _compute_slide(self, direction: Direction) -> tuple[list[int], int]:
        """Board after sliding, and the merge score earned. Pure."""
        board = list(self._board)
        merged: set[int] = set()
        score = 0
        rows, columns = self.build_traversals(direction)
        for row in rows:
            for column in columns:
                index = row * self._columns + column
                tile = board[index]
                if not tile:
                    continue

                farthest, nxt = self.find_farthest_position(row, column, direction, board)
                nxt_index = nxt[0] * self._columns + nxt[1]
                if (
                    self.within_bounds(*nxt)
                    and board[nxt_index] == tile
                    and nxt_index not in merged
                ):
                    board[nxt_index] = tile * 2
                    board[index] = 0
                    merged.add(nxt_index)
                    score += tile * 2
                elif farthest != (row, column):
                    board[farthest[0] * self._columns + farthest[1]] = tile
                    board[index] = 0
        return board, score

    def does_action_change_board(self, direction: Direction) -> bool:
        board, _ = self._compute_slide(direction)
        return board != self._board

    def _legal_directions(self) -> list[int]:
        return [int(d) for d in Direction if self.does_action_change_board(d)]

    # -- Action codec ------------------------------------------------------

    def action_to_chance_action(self, action: int) -> ChanceAction:
        return action_to_chance_action(action, self._rows, self._columns)

    def chance_action_to_action(self, move: ChanceAction) -> int:
        return chance_action_to_action(move, self._rows, self._columns)

    # -- State interface ---------------------------------------------------

    def current_player(self) -> int:
        if self.is_terminal():
            return PseudoPlayer.TERMINAL
        return self._current_player

    def is_terminal(self) -> bool:
        if self._move_number >= self._game.max_game_length():
            return True
        if self._current_player == PseudoPlayer.CHANCE:
            return False
        return not self._legal_directions()

    def legal_actions(self) -> list[int]:
        if self.is_terminal():
            return []
        if self._current_player == PseudoPlayer.CHANCE:
            return self.legal_chance_outcomes()
        return self._legal_directions()

    def chance_outcomes(self) -> ActionsAndProbs:
        if self.is_terminal():
            raise GameOverError()
        if self._current_player != PseudoPlayer.CHANCE:
            raise ValueError("Chance outcomes requested on a player turn")

        empty = [index for index, tile in enumerate(self._board) if tile == 0]
        outcomes: ActionsAndProbs = []
        for index in empty:
            row, column = divmod(index, self._columns)
            for is_four, probability in ((False, 1.0 - FOUR_TILE_PROBABILITY), (True, FOUR_TILE_PROBABILITY)):
                action = self.chance_action_to_action(ChanceAction(row, column, is_four))
                outcomes.append((action, probability / len(empty)))
        return outcomes

    def _do_apply_action(self, action: int) -> None:
        if self._current_player == PseudoPlayer.CHANCE:
            self._apply_chance(action)
        else:
            self._apply_slide(action_to_direction(action))

    def _apply_chance(self, action: int) -> None:
        move = self.action_to_chance_action(action)
        index = move.row * self._columns + move.column
        self._turn_history.append(TurnHistoryEntry(
            action=action,
            player=int(PseudoPlayer.CHANCE),
            previous_cells=((index, self._board[index]),),
            next_player=self._next_player,
        ))
        self._board[index] = move.value

        # The opening gives the chance player one turn per starting tile
        if self._move_number >= NUM_INITIAL_TILES - 1 or self.available_cell_count() == 0:
            self._current_player = self._next_player

    def _apply_slide(self, direction: Direction) -> None:
        player = self._current_player
        board, score = self._compute_slide(direction)
        changed = tuple(
            (index, old) for index, (old, new) in enumerate(zip(self._board, board))
            if old != new
        )
        self._turn_history.append(TurnHistoryEntry(
            action=int(direction),
            player=player,
            previous_cells=changed,
            score_gained=score,
            next_player=self._next_player,
        ))
        self._board = board
        self._scores[player] += score
        if score:
            logger.debug("Player %d merged for %d points sliding %s", player, score, direction.label)

        opponent = 1 - player
        self._next_player = opponent
        if self.available_cell_count() > 0:
            self._current_player = int(PseudoPlayer.CHANCE)
        else:
            self._current_player = opponent

    def _undo_action(self, player: int, action: int) -> None:
        if not self._turn_history:
            raise UndoError("Turn history is empty")
        entry = self._turn_history[-1]
        if entry.player != player or entry.action != action:
            raise UndoError(
                f"Turn history ends with ({entry.player}, {entry.action}), "
                f"not ({player}, {action})"
            )

        self._turn_history.pop()
        for index, value in entry.previous_cells:
            self._board[index] = value
        if entry.player >= 0:
            self._scores[entry.player] -= entry.score_gained
        self._current_player = entry.player
        self._next_player = entry.next_player

    def returns(self) -> list[float]:
        if not self.is_terminal():
            return [0.0, 0.0]
        if self._scores[0] > self._scores[1]:
            return [1.0, -1.0]
        if self._scores[0] < self._scores[1]:
            return [-1.0, 1.0]
        return [0.0, 0.0]

    def action_to_string(self, player: int, action: int) -> str:
        if player == PseudoPlayer.CHANCE:
            move = self.action_to_chance_action(action)
            return f"{move.value} added to row {move.row + 1}, column {move.column + 1}"
        return action_to_direction(action).label

    def __str__(self) -> str:
        lines = []
        for row in range(self._rows):
            start = row * self._columns
            lines.append("".join(
                str(tile).rjust(5) for tile in self._board[start:start + self._columns]
            ))
        return "\n".join(lines)

    def observation_tensor(self, player: int) -> np.ndarray:
        """
        One-hot tile planes.

        Plane 0 marks empty cells and plane k marks cells holding 2**k.
        Tiles beyond the last plane share it.
        """
        self._check_player(player)
        shape = self._game.observation_tensor_shape()
        obs = np.zeros(shape, dtype=np.float32)
        last_plane = shape[0] - 1
        for index, tile in enumerate(self._board):
            row, column = divmod(index, self._columns)
            plane = 0 if tile == 0 else min(int(tile).bit_length() - 1, last_plane)
            obs[plane, row, column] = 1.0
        return obs

    def serialize(self) -> str:
        snapshot = TwentyFortyEightSnapshot(
            game=str(self._game),
            current_player=self._current_player,
            move_number=self._move_number,
            history=[(entry.player, entry.action) for entry in self._history],
            board=self._board,
            next_player=self._next_player,
            scores=self._scores,
            turn_history=self._turn_history,
        )
        return snapshot.model_dump_json()

    @classmethod
    def from_snapshot(
        cls,
        game: TwentyFortyEightGame,
        snapshot: TwentyFortyEightSnapshot,
    ) -> TwentyFortyEightState:
        state = cls(game, game.rows, game.columns)
        state._board = list(snapshot.board)
        state._current_player = snapshot.current_player
        state._next_player = snapshot.next_player
        state._scores = list(snapshot.scores)
        state._turn_history = list(snapshot.turn_history)
        state._move_number = snapshot.move_number
        state._history = [PlayerAction(player=p, action=a) for p, a in snapshot.history]
        return state
