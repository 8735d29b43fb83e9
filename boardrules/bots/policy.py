"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and returns a decision.
Decisions include:
- Which action to take
- Explanation of why (for logs and debugging)
- How many alternatives were considered

Chance turns are not decided by policies; sample_chance_outcome() draws
from the state's published distribution instead.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import random
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..engine_core.action import ActionsAndProbs
    from ..engine_core.state import State


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - Confidence in the decision
    """
    action: int
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_actions: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    Implementations can range from simple baselines
    to search agents living outside this package.
    """

    @abstractmethod
    def select_action(
        self,
        state: State,
        legal_actions: list[int],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state (not modified)
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    - Random self-play from the CLI
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def select_action(
        self,
        state: State,
        legal_actions: list[int],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_action(
        self,
        state: State,
        legal_actions: list[int],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )


def sample_chance_outcome(outcomes: ActionsAndProbs, rng: random.Random) -> int:
    """Draw one action from (action, probability) pairs."""
    if not outcomes:
        raise ValueError("No chance outcomes to sample from")

    actions = [action for action, _ in outcomes]
    weights = [probability for _, probability in outcomes]
    return rng.choices(actions, weights=weights, k=1)[0]
