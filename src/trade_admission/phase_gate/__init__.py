"""Win-Rate Phase Gate Module.

Shadow-evaluates outcomes in a VIRTUAL phase and switches to REAL
trading when the rolling win rate meets the promotion rule; revokes
REAL when the live win rate falls below a floor.
"""

from .config import (
    PhaseGateConfig,
    DEFAULT_PHASE_GATE_CONFIG,
    InterimBand,
    PromotionRule,
)
from .models import TradePhase, TradeStats
from .gate import WinRatePhaseGate, TradeReachCallback

__all__ = [
    # Main gate
    "WinRatePhaseGate",
    "TradeReachCallback",
    # Configuration
    "PhaseGateConfig",
    "DEFAULT_PHASE_GATE_CONFIG",
    "InterimBand",
    "PromotionRule",
    # Models
    "TradePhase",
    "TradeStats",
]
