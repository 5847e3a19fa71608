"""Pytest configuration and shared fixtures."""

import pytest

from trade_admission.config import NotifierConfig
from trade_admission.notifications import AdmissionNotifier
from trade_admission.phase_gate import PhaseGateConfig, PromotionRule


@pytest.fixture
def small_gate_config() -> PhaseGateConfig:
    """Gate tuned with short windows and no interim band."""
    return PhaseGateConfig(
        min_virtual_trade_count=20,
        min_virtual_trade_win_rate=0.30,
        promotion_rule=PromotionRule.LOW_WIN_RATE,
        min_trade_count=25,
        min_trade_win_rate=0.50,
        interim_band=None,
    )


@pytest.fixture
def notifier() -> AdmissionNotifier:
    """Notifier that queues every message."""
    return AdmissionNotifier(NotifierConfig(enabled=True))
