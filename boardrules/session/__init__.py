"""
Session Module - Plays episodes against the engines.

An episode is one play-through of a game:
- Created from a descriptor's initial state
- Chance turns sampled from the published distribution
- Player turns decided by one BotPolicy per seat
- Ends at a terminal state or a step limit
"""

from .simulator import EpisodeRunner, EpisodeResult

__all__ = [
    "EpisodeRunner",
    "EpisodeResult",
]
