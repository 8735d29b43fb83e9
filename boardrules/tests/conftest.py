"""
Pytest fixtures for boardrules tests.
"""

import pytest

from ..engine_core.registry import load_game
from ..games.kalah import KalahGame, KalahState
from ..games.twenty_forty_eight import TwentyFortyEightGame, TwentyFortyEightState


@pytest.fixture
def kalah_game() -> KalahGame:
    """Kalah with default parameters."""
    return load_game("kalah")


@pytest.fixture
def kalah_state(kalah_game: KalahGame) -> KalahState:
    """Kalah initial state, player 0 to move."""
    return kalah_game.new_initial_state()


@pytest.fixture
def tile_game() -> TwentyFortyEightGame:
    """2048 on the default 4x4 board."""
    return load_game("2048")


@pytest.fixture
def small_tile_game() -> TwentyFortyEightGame:
    """2048 on a 2x2 board."""
    return load_game("2048(rows=2,columns=2)")


def play_setup(state: TwentyFortyEightState) -> TwentyFortyEightState:
    """Resolve the opening chance turns with the first outcome each time."""
    while state.is_chance_node():
        state.apply_action(state.legal_actions()[0])
    return state


def player_turn_state(game: TwentyFortyEightGame, board: list[int]) -> TwentyFortyEightState:
    """State after the opening with `board` installed and player 0 to move."""
    state = play_setup(game.new_initial_state())
    state.set_custom_board(board)
    return state


@pytest.fixture
def tile_state(tile_game: TwentyFortyEightGame) -> TwentyFortyEightState:
    """4x4 state past the opening, player 0 to move."""
    return play_setup(tile_game.new_initial_state())
