"""
Trade Admission - adaptive controller deciding whether the next trade
may risk real capital.

Combines a loss-streak cooldown controller and a rolling win-rate
phase gate, both fed one settled outcome at a time.
"""

__version__ = "1.0.0"

from .models import (
    ContractStatus,
    TradingContext,
    UnresolvedOutcomeError,
    outcome_from_status,
)
from .cooldown import TradeStateManager, CooldownController, CooldownState
from .phase_gate import WinRatePhaseGate, PhaseGateConfig, PromotionRule, TradePhase, TradeStats
from .session import TradeSession

__all__ = [
    "ContractStatus",
    "TradingContext",
    "UnresolvedOutcomeError",
    "outcome_from_status",
    "TradeStateManager",
    "CooldownController",
    "CooldownState",
    "WinRatePhaseGate",
    "PhaseGateConfig",
    "PromotionRule",
    "TradePhase",
    "TradeStats",
    "TradeSession",
]
