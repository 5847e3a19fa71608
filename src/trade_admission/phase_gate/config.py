"""Win-Rate Phase Gate Configuration.

Defines the window sizes and win-rate thresholds of the phase gate.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PromotionRule(Enum):
    """Comparison used to promote the gate from VIRTUAL to REAL."""
    LOW_WIN_RATE = "low_win_rate"    # promote when win_rate <= threshold
    HIGH_WIN_RATE = "high_win_rate"  # promote when win_rate >= threshold

    def matches(self, win_rate: float, threshold: float) -> bool:
        """Check whether a virtual win rate satisfies the rule."""
        if self is PromotionRule.LOW_WIN_RATE:
            return win_rate <= threshold
        return win_rate >= threshold


@dataclass
class InterimBand:
    """Early-exit band for the REAL phase.

    While the real trade count lies strictly between low_count and
    high_count, the win rate must stay at or above min_win_rate.
    """
    low_count: int = 50
    high_count: int = 70
    min_win_rate: float = 0.425

    def contains(self, trade_count: int) -> bool:
        return self.low_count < trade_count < self.high_count

    def to_dict(self) -> dict:
        return {
            "low_count": self.low_count,
            "high_count": self.high_count,
            "min_win_rate": self.min_win_rate,
        }


@dataclass
class PhaseGateConfig:
    """Configuration for the win-rate phase gate.

    Attributes:
        min_virtual_trade_count: Virtual window capacity and minimum
            virtual trades before promotion is considered
        min_virtual_trade_win_rate: Promotion threshold on the virtual
            win rate (direction given by promotion_rule)
        promotion_rule: Comparison applied to the virtual win rate

        min_trade_count: Real trades before the demotion floor applies
        min_trade_win_rate: Real win rate below which REAL is revoked
        interim_band: Optional stricter floor for a mid-window trade
            count range (None disables it)
    """
    # Virtual phase - promotion on a LOW win rate (contrarian signal)
    min_virtual_trade_count: int = 100
    min_virtual_trade_win_rate: float = 0.34
    promotion_rule: PromotionRule = PromotionRule.LOW_WIN_RATE

    # Real phase - demotion floor
    min_trade_count: int = 100
    min_trade_win_rate: float = 0.485
    interim_band: Optional[InterimBand] = field(default_factory=InterimBand)

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            "min_virtual_trade_count": self.min_virtual_trade_count,
            "min_virtual_trade_win_rate": self.min_virtual_trade_win_rate,
            "promotion_rule": self.promotion_rule.value,
            "min_trade_count": self.min_trade_count,
            "min_trade_win_rate": self.min_trade_win_rate,
            "interim_band": self.interim_band.to_dict() if self.interim_band else None,
        }


# Default configuration instance
DEFAULT_PHASE_GATE_CONFIG = PhaseGateConfig()
