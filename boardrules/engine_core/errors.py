"""
Engine Errors - Exceptions raised by the rule engines.

Engines do not recover from contract violations. Callers are expected to
respect legal_actions() and is_terminal(); anything else raises here and
leaves the state untouched.
"""

from __future__ import annotations
from typing import Sequence


class BoardRulesError(Exception):
    """Base class for all engine errors."""


class IllegalActionError(BoardRulesError):
    """Raised when an action is not in the current legal action set."""

    def __init__(self, action: int, player: int, legal_actions: Sequence[int] = ()):
        self.action = action
        self.player = player
        self.legal_actions = list(legal_actions)
        super().__init__(
            f"Action {action} is not legal for player {player}; "
            f"legal actions: {self.legal_actions}"
        )


class GameOverError(IllegalActionError):
    """Raised when acting on (or probing chance outcomes of) a terminal state."""

    def __init__(self, action: int | None = None, player: int | None = None):
        self.action = action
        self.player = player
        self.legal_actions = []
        BoardRulesError.__init__(self, "Game is over - no actions allowed")


class UndoError(BoardRulesError):
    """Raised when an undo does not match the most recent history entry."""


class InvalidParametersError(BoardRulesError):
    """Raised when game parameters fail validation."""

    def __init__(self, game_name: str, errors: list[str]):
        self.game_name = game_name
        self.errors = errors
        super().__init__(
            f"Invalid parameters for '{game_name}' ({len(errors)} error(s)): "
            + "; ".join(errors)
        )


class UnknownGameError(BoardRulesError):
    """Raised when loading a game name that is not registered."""

    def __init__(self, name: str, known: Sequence[str] = ()):
        self.name = name
        self.known = list(known)
        super().__init__(f"Unknown game '{name}'. Registered games: {self.known}")


class SerializationError(BoardRulesError):
    """Raised when a serialized state cannot be restored."""
