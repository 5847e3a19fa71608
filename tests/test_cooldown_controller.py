"""Property-based tests for the Cooldown Controller and Trade State Manager.

Uses Hypothesis for property-based testing of cooldown entry/exit and
reset behaviour.
"""

import pytest
from hypothesis import given, strategies as st, settings

from trade_admission.cooldown import (
    CooldownConfig,
    CooldownController,
    CooldownState,
    TradeStateManager,
)


outcomes_strategy = st.lists(st.booleans(), max_size=150)


class TestCooldownSequence:
    """Walk-through of a mixed outcome sequence."""

    def test_known_sequence(self):
        """Permission after each outcome of a reference sequence (seed 3)."""
        manager = TradeStateManager(3)
        results = [
            True, False, False, False, True, False, False, False, True,
            False, False, False, False, False, False, False, True, False,
        ]
        expected = [
            True, False, False, False, False, False, False, True, True,
            False, False, False, True, True, True, True, True, False,
        ]

        observed = []
        for is_win in results:
            manager.update_trade_result(is_win)
            observed.append(manager.can_trade())

        assert observed == expected

    def test_first_loss_without_prior_win_does_not_block(self):
        manager = TradeStateManager(3)
        for _ in range(10):
            manager.update_trade_result(False)
            assert manager.can_trade()

    def test_win_inside_cooldown_restarts_count(self):
        manager = TradeStateManager(3)
        manager.update_trade_result(True)
        manager.update_trade_result(False)
        manager.update_trade_result(False)
        manager.update_trade_result(False)
        assert manager.get_current_loss_count() == 2

        manager.update_trade_result(True)

        assert manager.get_current_loss_count() == 0
        assert not manager.can_trade()

    def test_cooldown_length_follows_streak_average(self):
        """Exit SHALL happen exactly when virtual losses reach the average."""
        manager = TradeStateManager(0)
        for _ in range(6):
            manager.update_trade_result(False)
        manager.update_trade_result(True)
        manager.update_trade_result(False)

        assert not manager.can_trade()
        assert manager.get_loss_average() == 6

        for _ in range(5):
            manager.update_trade_result(False)
            assert not manager.can_trade()

        manager.update_trade_result(False)
        assert manager.can_trade()
        assert manager.get_current_loss_count() == 0

    def test_cooldown_outcomes_do_not_feed_tracker(self):
        controller = CooldownController(CooldownConfig(loss_average_floor=0))
        controller.update(False)
        controller.update(False)
        controller.update(True)   # streaks [2]
        controller.update(False)  # tracked, current streak 1
        assert controller.state is CooldownState.VIRTUAL_LOSS

        controller.update(False)
        controller.update(False)
        assert controller.state is CooldownState.NORMAL

        # Closes a streak of 1, not 3: streaks [2, 1]
        controller.update(True)
        assert controller.loss_average() == 1


class TestCooldownEntryExit:
    """Tests for cooldown entry and exit properties."""

    @given(sequence=outcomes_strategy)
    @settings(max_examples=200)
    def test_entry_only_after_loss_following_win(self, sequence: list):
        """VIRTUAL_LOSS SHALL be entered only on a loss after a win since
        the previous exit (or since creation)."""
        controller = CooldownController()
        won_since_exit = False

        for is_win in sequence:
            before = controller.state
            controller.update(is_win)
            after = controller.state

            if before is CooldownState.NORMAL:
                if after is CooldownState.VIRTUAL_LOSS:
                    assert not is_win
                    assert won_since_exit
                    won_since_exit = False
                elif is_win:
                    won_since_exit = True

    @given(sequence=outcomes_strategy)
    @settings(max_examples=200)
    def test_exit_exactly_at_average(self, sequence: list):
        """Exit SHALL happen exactly when the virtual loss count reaches
        max(streak average, floor)."""
        controller = CooldownController()

        for is_win in sequence:
            if controller.state is CooldownState.VIRTUAL_LOSS:
                average = controller.loss_average()
                next_count = 0 if is_win else controller.current_loss_count() + 1
                controller.update(is_win)
                if next_count >= average:
                    assert controller.state is CooldownState.NORMAL
                    assert controller.current_loss_count() == 0
                else:
                    assert controller.state is CooldownState.VIRTUAL_LOSS
                    assert controller.current_loss_count() == next_count
            else:
                controller.update(is_win)

    @given(sequence=outcomes_strategy)
    @settings(max_examples=100)
    def test_can_trade_mirrors_state(self, sequence: list):
        controller = CooldownController()
        for is_win in sequence:
            controller.update(is_win)
            assert controller.can_trade() == (controller.state is CooldownState.NORMAL)

    @given(sequence=outcomes_strategy)
    @settings(max_examples=100)
    def test_loss_average_never_below_floor(self, sequence: list):
        manager = TradeStateManager(0, loss_average_floor=3)
        for is_win in sequence:
            manager.update_trade_result(is_win)
            assert manager.get_loss_average() >= 3


class TestResetBehavior:
    """Tests for reset functionality."""

    @given(seed=st.integers(min_value=0, max_value=10), sequence=outcomes_strategy)
    @settings(max_examples=100)
    def test_reset_restores_initial_values(self, seed: int, sequence: list):
        manager = TradeStateManager(seed)
        fresh = TradeStateManager(seed)
        for is_win in sequence:
            manager.update_trade_result(is_win)

        manager.reset()

        assert manager.can_trade() == fresh.can_trade()
        assert manager.get_loss_average() == fresh.get_loss_average()
        assert manager.get_current_loss_count() == fresh.get_current_loss_count()
        controller = manager.controller
        assert controller.state is CooldownState.NORMAL
        assert controller.has_won_since_virtual_exit is False

    def test_reset_requires_new_win_before_cooldown(self):
        manager = TradeStateManager(3)
        manager.update_trade_result(True)
        manager.reset()

        manager.update_trade_result(False)

        assert manager.can_trade()


class TestFacade:
    """Tests for the TradeStateManager facade."""

    def test_initial_state(self):
        manager = TradeStateManager(3)
        assert manager.can_trade()
        assert manager.get_loss_average() == 3
        assert manager.get_current_loss_count() == 0

    def test_seed_above_floor_reported(self):
        manager = TradeStateManager(7)
        assert manager.get_loss_average() == 7

    def test_config_overrides_arguments(self):
        manager = TradeStateManager(
            1, config=CooldownConfig(initial_loss_average=9, loss_average_floor=4)
        )
        assert manager.get_loss_average() == 9
        assert manager.controller.config.loss_average_floor == 4
