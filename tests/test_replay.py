"""Tests for the outcome replay entry point."""

import pytest

from main import parse_outcomes, replay
from trade_admission.config import AdmissionConfig, NotifierConfig
from trade_admission.notifications import AdmissionNotifier
from trade_admission.session import TradeSession


class TestParseOutcomes:
    """Tests for W/L sequence parsing."""

    def test_symbols_and_separators(self):
        assert parse_outcomes("W L,l;\nw") == [True, False, False, True]

    def test_empty(self):
        assert parse_outcomes("") == []

    def test_invalid_symbol(self):
        with pytest.raises(ValueError):
            parse_outcomes("WLX")


class TestReplay:
    """Tests for replay summaries."""

    def test_counts_only_admitted_trades(self):
        session = TradeSession(
            AdmissionConfig(use_phase_gate=False),
            notifier=AdmissionNotifier(NotifierConfig(enabled=True)),
        )

        # W admitted, L admitted (enters cooldown), then 3 virtual losses
        summary = replay(session, parse_outcomes("WLLLLW"))

        assert summary["outcomes"] == 6
        assert summary["real_trades"] == 3
        assert summary["real_wins"] == 2
        assert summary["real_win_rate"] == pytest.approx(2 / 3)
        assert summary["status"]["can_trade"] is True
        assert session.notifier.get_queued_messages() == []
