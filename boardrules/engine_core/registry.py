"""
Game Registry - Maps game-kind tags to descriptor classes.

Concrete games register themselves with @register_game when the
boardrules.games package is imported. load_game() accepts either a bare
name ("kalah") or a game string with options ("2048(rows=3,columns=5)").
"""

from __future__ import annotations
import logging
from typing import Any, Mapping

from .errors import UnknownGameError
from .game import Game, GameKind
from .params import parse_game_string

logger = logging.getLogger(__name__)

_REGISTRY: dict[GameKind, type[Game]] = {}


def register_game(cls: type[Game]) -> type[Game]:
    """Class decorator registering a Game subclass under its kind tag."""
    kind = cls.game_type.kind
    if kind in _REGISTRY and _REGISTRY[kind] is not cls:
        raise ValueError(f"Game kind '{kind.value}' is already registered")
    _REGISTRY[kind] = cls
    return cls


def _ensure_games_loaded() -> None:
    # Importing the package runs the @register_game decorators
    from .. import games  # noqa: F401


def registered_games() -> list[str]:
    """Short names of all registered games, sorted."""
    _ensure_games_loaded()
    return sorted(kind.value for kind in _REGISTRY)


def game_class(name: str) -> type[Game]:
    """Look up the descriptor class for a short name."""
    _ensure_games_loaded()
    try:
        kind = GameKind(name)
    except ValueError:
        raise UnknownGameError(name, registered_games()) from None
    if kind not in _REGISTRY:
        raise UnknownGameError(name, registered_games())
    return _REGISTRY[kind]


def load_game(game_string: str, params: Mapping[str, Any] | None = None) -> Game:
    """
    Build a game descriptor.

    Options given in the game string are overridden by `params`.
    Raises UnknownGameError or InvalidParametersError.
    """
    name, options = parse_game_string(game_string)
    merged: dict[str, Any] = dict(options)
    if params:
        merged.update(params)

    game = game_class(name)(merged)
    logger.info("Loaded game %s", game)
    return game
