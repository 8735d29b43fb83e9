"""
Tests for bot action selection and legality.

Tests:
- Bots select legal actions
- Baselines are deterministic given a seed
- Chance sampling follows the published distribution
"""

import random

import pytest

from ..bots import BotPolicy, FirstLegalPolicy, RandomPolicy, sample_chance_outcome


class TestBotActionLegality:
    """Tests that bots only select legal actions."""

    def test_random_bot_selects_legal(self, kalah_state):
        """Random bot selects legal actions."""
        bot = RandomPolicy(seed=42)
        legal = kalah_state.legal_actions()

        # Run multiple times to test randomness
        for _ in range(10):
            decision = bot.select_action(kalah_state, legal)
            assert decision.action in legal
            assert decision.evaluated_actions == len(legal)

    def test_first_legal(self, tile_state):
        """FirstLegalPolicy picks the lowest legal action."""
        legal = tile_state.legal_actions()
        decision = FirstLegalPolicy().select_action(tile_state, legal)
        assert decision.action == legal[0]

    def test_no_legal_actions(self, kalah_state):
        """Policies refuse an empty action list."""
        with pytest.raises(ValueError):
            RandomPolicy(seed=1).select_action(kalah_state, [])
        with pytest.raises(ValueError):
            FirstLegalPolicy().select_action(kalah_state, [])

    def test_seeded_random_is_reproducible(self, kalah_state):
        """Equal seeds give equal choices."""
        legal = kalah_state.legal_actions()
        first = [RandomPolicy(seed=7).select_action(kalah_state, legal).action for _ in range(5)]
        second = [RandomPolicy(seed=7).select_action(kalah_state, legal).action for _ in range(5)]
        assert first == second

    def test_policies_are_bot_policies(self):
        """Baselines implement the BotPolicy interface."""
        assert isinstance(RandomPolicy(), BotPolicy)
        assert FirstLegalPolicy().get_name() == "FirstLegalPolicy"


class TestChanceSampling:
    """Tests for chance outcome sampling."""

    def test_samples_from_outcomes(self, tile_game):
        """Sampled actions are always published outcomes."""
        state = tile_game.new_initial_state()
        outcomes = state.chance_outcomes()
        rng = random.Random(0)
        actions = {a for a, _ in outcomes}
        for _ in range(50):
            assert sample_chance_outcome(outcomes, rng) in actions

    def test_zero_probability_never_drawn(self):
        """Outcomes with zero weight are never sampled."""
        rng = random.Random(3)
        outcomes = [(0, 0.0), (5, 1.0)]
        assert all(sample_chance_outcome(outcomes, rng) == 5 for _ in range(20))

    def test_empty_outcomes(self):
        """Sampling from nothing raises."""
        with pytest.raises(ValueError):
            sample_chance_outcome([], random.Random(0))
