"""
Bots module - Baseline players for simulation and testing.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy / FirstLegalPolicy: Baselines
- sample_chance_outcome: Resolves chance turns
"""

from .policy import (
    BotPolicy,
    BotDecision,
    RandomPolicy,
    FirstLegalPolicy,
    sample_chance_outcome,
)

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "sample_chance_outcome",
]
