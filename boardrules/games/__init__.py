"""
Games module - Concrete rule engines.

Each game has its own subpackage with:
- A Game descriptor and its pydantic parameter model
- A State implementing the rules
- Game-specific layout or action codec helpers

Importing this package registers every game with the engine registry.
"""

from .kalah import KalahGame
from .twenty_forty_eight import TwentyFortyEightGame

__all__ = ["KalahGame", "TwentyFortyEightGame"]
