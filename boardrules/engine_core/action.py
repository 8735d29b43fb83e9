"""
Action System - Integer actions, history records and codec helpers.

Actions are plain ints. Each game maps them to its own structured moves
(pit index, slide direction, chance placement); the helpers here are the
shared pieces:
1. PlayerAction: one (player, action) history record
2. Mixed-radix rank/unrank for multi-field action descriptors
3. ActionsAndProbs: the chance outcome distribution type
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

# (action, probability) pairs published by a chance node
ActionsAndProbs = list[tuple[int, float]]


@dataclass(frozen=True)
class PlayerAction:
    """
    A single applied action and the player who applied it.

    The chance pseudo player appears here like any other player.
    """
    player: int
    action: int


def rank_action_mixed_base(digits: Sequence[int], bases: Sequence[int]) -> int:
    """
    Encode per-field values into one int using a mixed-radix system.

    The first field is the most significant. Each digit must lie in
    [0, base) for its field.
    """
    if len(digits) != len(bases):
        raise ValueError(f"Expected {len(bases)} digits, got {len(digits)}")

    action = 0
    for digit, base in zip(digits, bases):
        if not 0 <= digit < base:
            raise ValueError(f"Digit {digit} out of range for base {base}")
        action = action * base + digit
    return action


def unrank_action_mixed_base(action: int, bases: Sequence[int]) -> list[int]:
    """Inverse of rank_action_mixed_base."""
    total = 1
    for base in bases:
        total *= base
    if not 0 <= action < total:
        raise ValueError(f"Action {action} out of range [0, {total})")

    digits = [0] * len(bases)
    for i in range(len(bases) - 1, -1, -1):
        action, digits[i] = divmod(action, bases[i])
    return digits
