"""
boardrules - Rule engines for two-player board games

Deterministic engines exposing one state-machine interface:
- Kalah (seed sowing with captures)
- 2048 for two players (sliding merges with an explicit chance player)

Each game provides:
- Legal action generation and validated transitions
- Terminal detection and returns
- Rendering, observation tensors and serialization
"""

from .engine_core.registry import load_game, registered_games

__version__ = "0.1.0"

__all__ = ["load_game", "registered_games", "__version__"]
