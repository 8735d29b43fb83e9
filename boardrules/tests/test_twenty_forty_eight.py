"""
Tests for the two-player 2048 rule engine.

Tests:
- Opening chance turns and the outcome distribution
- Slides, merges and scoring
- Termination and returns
- Exact undo
- Action codecs, rendering and serialization
"""

import json
import random

import numpy as np
import pytest

from ..bots.policy import sample_chance_outcome
from ..engine_core.errors import (
    GameOverError,
    IllegalActionError,
    SerializationError,
    UndoError,
)
from ..engine_core.registry import load_game
from ..engine_core.state import PseudoPlayer
from ..games.twenty_forty_eight import (
    ChanceAction,
    Direction,
    action_to_chance_action,
    action_to_direction,
    chance_action_to_action,
    direction_to_action,
)
from .conftest import play_setup, player_turn_state

EMPTY = [0] * 16
CHECKERBOARD = [
    2, 4, 2, 4,
    4, 2, 4, 2,
    2, 4, 2, 4,
    4, 2, 4, 2,
]


def with_first_row(row: list[int]) -> list[int]:
    return row + [0] * 12


class TestOpening:
    """Tests for the chance-driven opening."""

    def test_starts_with_chance(self, tile_game):
        """The chance player acts first."""
        state = tile_game.new_initial_state()
        assert state.current_player() == PseudoPlayer.CHANCE
        assert state.is_chance_node()
        assert not state.is_player_node()

    def test_initial_distribution(self, tile_game):
        """Every empty cell gets a 2 (90%) or a 4 (10%)."""
        state = tile_game.new_initial_state()
        outcomes = state.chance_outcomes()

        assert len(outcomes) == 32
        assert sum(p for _, p in outcomes) == pytest.approx(1.0)
        assert outcomes[0] == (0, pytest.approx(0.9 / 16))
        assert outcomes[1] == (1, pytest.approx(0.1 / 16))
        assert state.legal_actions() == [a for a, _ in outcomes]

    def test_two_tiles_then_player_zero(self, tile_game):
        """Two placements, then player 0 moves."""
        state = tile_game.new_initial_state()
        state.apply_action(0)
        assert state.is_chance_node()
        assert len(state.chance_outcomes()) == 30

        state.apply_action(2)
        assert state.current_player() == 0
        assert state.board_at(0, 0) == 2
        assert state.board_at(0, 1) == 2
        assert state.move_number == 2

    def test_chance_mask_size(self, tile_game):
        """Chance masks cover the whole chance action space."""
        state = tile_game.new_initial_state()
        mask = state.legal_actions_mask()
        assert len(mask) == tile_game.max_chance_outcomes()
        assert sum(mask) == 32


class TestSlides:
    """Tests for slide and merge mechanics."""

    def test_merge_pairs_left(self, tile_game):
        """Four equal tiles merge into two."""
        state = player_turn_state(tile_game, with_first_row([2, 2, 2, 2]))
        state.apply_action(Direction.LEFT)

        assert state.board[:4] == [4, 4, 0, 0]
        assert state.score(0) == 8
        assert state.score(1) == 0

    def test_merge_pairs_right(self, tile_game):
        """Merges happen at the far edge first."""
        state = player_turn_state(tile_game, with_first_row([2, 2, 2, 2]))
        state.apply_action(Direction.RIGHT)
        assert state.board[:4] == [0, 0, 4, 4]

    def test_one_merge_per_tile(self, tile_game):
        """A merged tile does not merge again in the same move."""
        state = player_turn_state(tile_game, with_first_row([2, 2, 4, 0]))
        state.apply_action(Direction.LEFT)

        assert state.board[:4] == [4, 4, 0, 0]
        assert state.score(0) == 4

    def test_slide_down_column(self, tile_game):
        """Tiles slide and merge along columns."""
        board = list(EMPTY)
        board[0] = 2
        board[4] = 2
        board[12] = 4
        state = player_turn_state(tile_game, board)
        state.apply_action(Direction.DOWN)

        column = [state.board_at(row, 0) for row in range(4)]
        assert column == [0, 0, 4, 4]
        assert state.score(0) == 4

    def test_legal_directions(self, tile_game):
        """Only directions that change the board are legal."""
        board = list(EMPTY)
        board[0] = 2
        state = player_turn_state(tile_game, board)
        assert state.legal_actions() == [Direction.RIGHT, Direction.DOWN]

    def test_illegal_direction_rejected(self, tile_game):
        """A no-op slide is rejected and changes nothing."""
        board = list(EMPTY)
        board[0] = 2
        state = player_turn_state(tile_game, board)
        before = state.serialize()

        with pytest.raises(IllegalActionError):
            state.apply_action(Direction.UP)

        assert state.serialize() == before

    def test_chance_follows_slide(self, tile_state):
        """After a slide the chance player moves, then the opponent."""
        tile_state.apply_action(Direction.LEFT)
        assert tile_state.is_chance_node()

        tile_state.apply_action(tile_state.legal_actions()[0])
        assert tile_state.current_player() == 1

    def test_full_board_skips_chance(self, tile_state):
        """With no empty cell the opponent moves directly."""
        tile_state.apply_action(Direction.LEFT)
        tile_state.set_custom_board([2, 2, 4, 8] * 4)
        assert tile_state.current_player() == 1

    def test_chance_outcomes_on_player_turn(self, tile_state):
        """Only chance nodes publish outcomes."""
        with pytest.raises(ValueError):
            tile_state.chance_outcomes()


class TestTermination:
    """Tests for the end of the game."""

    def test_blocked_board_ends_game(self, small_tile_game):
        """The game ends when the player to move cannot slide."""
        state = player_turn_state(small_tile_game, [2, 2, 8, 4])
        state.apply_action(Direction.LEFT)
        assert state.board == [4, 0, 8, 4]

        state.apply_action(state.chance_action_to_action(ChanceAction(0, 1, False)))

        assert state.is_terminal()
        assert state.current_player() == PseudoPlayer.TERMINAL
        assert state.legal_actions() == []
        assert state.returns() == [1.0, -1.0]

    def test_terminal_rejects_actions(self, tile_game):
        """Terminal states raise GameOverError."""
        state = player_turn_state(tile_game, CHECKERBOARD)
        assert state.is_terminal()
        assert state.returns() == [0.0, 0.0]

        with pytest.raises(GameOverError):
            state.apply_action(Direction.UP)
        with pytest.raises(GameOverError):
            state.chance_outcomes()

    def test_move_limit(self, tile_state, tile_game):
        """Reaching the move limit ends the game."""
        data = json.loads(tile_state.serialize())
        data["move_number"] = tile_game.max_game_length()
        restored = tile_game.deserialize_state(json.dumps(data))
        assert restored.is_terminal()

    def test_tile_matches_available(self, tile_game):
        """Adjacent equal tiles are detected."""
        state = player_turn_state(tile_game, CHECKERBOARD)
        assert not state.tile_matches_available()

        state.set_board(0, 1, 2)
        assert state.tile_matches_available()
        assert not state.is_terminal()


class TestUndo:
    """Tests for exact undo."""

    def test_undo_restores_slide(self, tile_game):
        """Undo brings back the board, score and player."""
        state = player_turn_state(tile_game, with_first_row([2, 2, 2, 2]))
        before = state.serialize()

        state.apply_action(Direction.LEFT)
        state.undo_action(0, Direction.LEFT)

        assert state.serialize() == before
        assert state.score(0) == 0
        assert state.current_player() == 0

    def test_undo_random_play(self, tile_game):
        """Every apply/undo pair restores the exact serialization."""
        rng = random.Random(11)
        state = tile_game.new_initial_state()
        for _ in range(200):
            if state.is_terminal():
                break
            before = state.serialize()
            player = state.current_player()
            if state.is_chance_node():
                action = sample_chance_outcome(state.chance_outcomes(), rng)
            else:
                action = rng.choice(state.legal_actions())

            state.apply_action(action)
            state.undo_action(player, action)
            assert state.serialize() == before
            state.apply_action(action)

    def test_undo_to_start(self, tile_game):
        """Undoing the whole history returns to the initial state."""
        initial = tile_game.new_initial_state()
        state = initial.clone()
        rng = random.Random(5)
        for _ in range(30):
            if state.is_terminal():
                break
            state.apply_action(rng.choice(state.legal_actions()))

        for entry in reversed(state.full_history()):
            state.undo_action(entry.player, entry.action)

        assert state.serialize() == initial.serialize()

    def test_undo_empty_history(self, tile_game):
        """Nothing to undo at the initial state."""
        with pytest.raises(UndoError):
            tile_game.new_initial_state().undo_action(PseudoPlayer.CHANCE, 0)

    def test_undo_mismatch(self, tile_state):
        """Only the most recent ply can be undone."""
        tile_state.apply_action(Direction.LEFT)
        with pytest.raises(UndoError):
            tile_state.undo_action(1, Direction.LEFT)


class TestCodec:
    """Tests for action encoding and decoding."""

    def test_direction_ids(self):
        """Directions map to 0..3 in clockwise order from up."""
        assert [direction_to_action(d) for d in Direction] == [0, 1, 2, 3]
        assert action_to_direction(3) == Direction.LEFT

    def test_chance_codec_bijection(self):
        """Every chance action decodes and re-encodes to itself."""
        for action in range(3 * 5 * 2):
            move = action_to_chance_action(action, 3, 5)
            assert chance_action_to_action(move, 3, 5) == action

    def test_chance_action_layout(self):
        """Chance actions rank row, then column, then tile value."""
        assert chance_action_to_action(ChanceAction(1, 2, True), 4, 4) == 13
        assert action_to_chance_action(13, 4, 4) == ChanceAction(1, 2, True)

    def test_out_of_range(self):
        """Codecs reject actions outside their ranges."""
        with pytest.raises(ValueError):
            action_to_direction(4)
        with pytest.raises(ValueError):
            action_to_chance_action(32, 4, 4)

    def test_legal_actions_round_trip(self, tile_game):
        """Legal actions seen during play survive decode/encode."""
        rng = random.Random(2)
        state = tile_game.new_initial_state()
        for _ in range(60):
            if state.is_terminal():
                break
            for action in state.legal_actions():
                if state.is_chance_node():
                    move = state.action_to_chance_action(action)
                    assert state.chance_action_to_action(move) == action
                else:
                    assert direction_to_action(action_to_direction(action)) == action
            state.apply_action(rng.choice(state.legal_actions()))

    def test_action_strings(self, tile_state):
        """Slides and placements render readably."""
        assert tile_state.action_to_string(0, Direction.UP) == "Up"
        assert tile_state.action_to_string(1, Direction.LEFT) == "Left"
        assert (
            tile_state.action_to_string(PseudoPlayer.CHANCE, 13)
            == "4 added to row 2, column 3"
        )


class TestBoardAccess:
    """Tests for board helpers."""

    def test_set_and_get(self, tile_state):
        """Cells can be written and read back."""
        tile_state.set_board(2, 3, 64)
        assert tile_state.board_at(2, 3) == 64
        assert not tile_state.cell_available(2, 3)

    def test_out_of_bounds(self, tile_state):
        """Cells outside the board raise IndexError."""
        assert not tile_state.within_bounds(4, 0)
        with pytest.raises(IndexError):
            tile_state.board_at(4, 0)
        with pytest.raises(IndexError):
            tile_state.set_board(0, -1, 2)

    def test_custom_board_length(self, tile_state):
        """A custom board must cover every cell."""
        with pytest.raises(ValueError):
            tile_state.set_custom_board([2, 4])

    def test_available_cells(self, tile_state):
        """The opening leaves fourteen empty cells."""
        assert tile_state.available_cell_count() == 14

    def test_traversals(self, tile_state):
        """Traversals start at the destination edge."""
        assert tile_state.build_traversals(Direction.DOWN) == ([3, 2, 1, 0], [0, 1, 2, 3])
        assert tile_state.build_traversals(Direction.RIGHT) == ([0, 1, 2, 3], [3, 2, 1, 0])
        assert tile_state.build_traversals(Direction.UP) == ([0, 1, 2, 3], [0, 1, 2, 3])

    def test_find_farthest_position(self, tile_game):
        """The walk stops before the first occupied cell or the edge."""
        board = list(EMPTY)
        board[3] = 2
        state = player_turn_state(tile_game, board)

        assert state.find_farthest_position(0, 0, Direction.RIGHT) == ((0, 2), (0, 3))
        assert state.find_farthest_position(3, 3, Direction.DOWN) == ((3, 3), (4, 3))


class TestRendering:
    """Tests for string and tensor observations."""

    def test_str(self, small_tile_game):
        """Rows render right-aligned in five columns."""
        state = player_turn_state(small_tile_game, [2, 0, 0, 1024])
        assert str(state) == "    2    0\n    0 1024"
        assert state.observation_string(0) == str(state)

    def test_observation_tensor(self, small_tile_game):
        """Plane k marks tiles of value 2**k, plane 0 empty cells."""
        state = player_turn_state(small_tile_game, [2, 0, 4, 0])
        obs = state.observation_tensor(0)

        assert obs.shape == (6, 2, 2)
        assert obs.dtype == np.float32
        assert obs[1, 0, 0] == 1
        assert obs[2, 1, 0] == 1
        assert obs[0, 0, 1] == 1
        assert obs[0, 1, 1] == 1
        assert obs.sum() == 4

    def test_observation_bad_player(self, tile_state):
        """Out-of-range players raise ValueError."""
        with pytest.raises(ValueError):
            tile_state.observation_tensor(2)


class TestSerialization:
    """Tests for saving and restoring states."""

    def test_round_trip_keeps_undo_stack(self, tile_game):
        """Restored states serialize identically and can still undo."""
        rng = random.Random(8)
        state = tile_game.new_initial_state()
        for _ in range(25):
            if state.is_terminal():
                break
            state.apply_action(rng.choice(state.legal_actions()))

        restored = tile_game.deserialize_state(state.serialize())
        assert restored.serialize() == state.serialize()
        assert str(restored) == str(state)
        assert restored.current_player() == state.current_player()
        assert restored.scores == state.scores

        last = state.full_history()[-1]
        state.undo_action(last.player, last.action)
        restored.undo_action(last.player, last.action)
        assert restored.serialize() == state.serialize()

    def test_dimension_mismatch(self, tile_state):
        """A 4x4 snapshot does not load into a 3x3 game."""
        with pytest.raises(SerializationError):
            load_game("2048(rows=3,columns=3)").deserialize_state(tile_state.serialize())

    def test_setup_helper_reaches_player_turn(self, tile_game):
        """Resolving the opening hands the move to player 0."""
        state = play_setup(tile_game.new_initial_state())
        assert state.current_player() == 0
