"""Win-Rate Phase Gate Data Models."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class TradePhase(Enum):
    """Phase of the win-rate gate."""
    VIRTUAL = "virtual"  # shadow evaluation, no capital at risk
    REAL = "real"        # live trading, monitored and revocable


@dataclass
class TradeStats:
    """Win/loss summary of a trade window.

    Attributes:
        win: Number of winning trades
        loss: Number of losing trades
        total_trades: Window length
        win_rate: win / total_trades, 0.0 for an empty window
    """
    win: int = 0
    loss: int = 0
    total_trades: int = 0
    win_rate: float = 0.0

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[bool]) -> "TradeStats":
        """Reduce a sequence of outcomes into stats."""
        stats = cls()
        for is_win in outcomes:
            if is_win:
                stats.win += 1
            else:
                stats.loss += 1
            stats.total_trades += 1
        if stats.total_trades:
            stats.win_rate = stats.win / stats.total_trades
        return stats

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "win": self.win,
            "loss": self.loss,
            "total_trades": self.total_trades,
            "win_rate": self.win_rate,
        }
