"""Win-Rate Phase Gate.

Two-phase rolling win-rate state machine deciding whether trades risk
real capital.
"""

import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from .config import PhaseGateConfig
from .models import TradePhase, TradeStats


logger = logging.getLogger(__name__)

# Called once per phase transition with the window snapshot taken before
# it is cleared and the phase being left ("virtual" or "real").
TradeReachCallback = Callable[[TradeStats, str], None]


class WinRatePhaseGate:
    """Toggles between a VIRTUAL and a REAL trading phase.

    VIRTUAL: outcomes fill a bounded window (oldest evicted). Once the
    window is full and its win rate satisfies the promotion rule, the
    gate promotes to REAL.

    REAL: outcomes fill an unbounded window. The gate demotes back to
    VIRTUAL when the win rate falls below the interim floor inside the
    interim band, or below the final floor once min_trade_count trades
    have been seen.

    The window of the phase being left is cleared on every transition.
    """

    def __init__(
        self,
        config: Optional[PhaseGateConfig] = None,
        on_trade_reach: Optional[TradeReachCallback] = None,
    ):
        """Initialize with configuration.

        Args:
            config: Phase gate configuration (uses defaults if None)
            on_trade_reach: Optional transition callback, must not block
        """
        self.config = config or PhaseGateConfig()
        self._on_trade_reach = on_trade_reach
        self.phase = TradePhase.VIRTUAL
        self._virtual_trades: Deque[bool] = deque(
            maxlen=self.config.min_virtual_trade_count
        )
        self._real_trades: List[bool] = []
        self.virtual_win_rate: float = 0.0
        self.real_win_rate: float = 0.0

    def set_on_trade_reach(self, callback: Optional[TradeReachCallback]) -> None:
        self._on_trade_reach = callback

    def update(self, is_win: bool) -> None:
        """Feed one outcome into the window of the current phase."""
        if self.phase is TradePhase.REAL:
            self.update_trade_stats(is_win)
        else:
            self.update_virtual_trade_stats(is_win)

    def update_virtual_trade_stats(self, is_win: bool) -> None:
        """Record a virtual outcome. No-op while in REAL.

        Args:
            is_win: True for a winning trade
        """
        if self.phase is TradePhase.REAL:
            return

        self._virtual_trades.append(is_win)
        self.virtual_win_rate = self._calculate_win_rate(self._virtual_trades)

        trades_count = len(self._virtual_trades)
        if trades_count < self.config.min_virtual_trade_count:
            return
        if not self.config.promotion_rule.matches(
            self.virtual_win_rate, self.config.min_virtual_trade_win_rate
        ):
            return

        self.phase = TradePhase.REAL
        stats = self.get_virtual_stats()
        logger.info(
            f"Promoted to REAL: virtual win rate {stats.win_rate:.2%} "
            f"over {stats.total_trades} trades "
            f"({self.config.promotion_rule.value}, "
            f"threshold {self.config.min_virtual_trade_win_rate:.2%})"
        )
        self._notify(stats, TradePhase.VIRTUAL)
        self._virtual_trades.clear()
        self.virtual_win_rate = 0.0

    def update_trade_stats(self, is_win: bool) -> None:
        """Record a real outcome. No-op while in VIRTUAL.

        Args:
            is_win: True for a winning trade
        """
        if self.phase is TradePhase.VIRTUAL:
            return

        self._real_trades.append(is_win)
        self.real_win_rate = self._calculate_win_rate(self._real_trades)

        reason = self._demotion_reason(len(self._real_trades), self.real_win_rate)
        if reason is None:
            return

        self.phase = TradePhase.VIRTUAL
        stats = self.get_trade_stats()
        logger.info(
            f"Demoted to VIRTUAL: {reason} "
            f"(real win rate {stats.win_rate:.2%} over {stats.total_trades} trades)"
        )
        self._notify(stats, TradePhase.REAL)
        self._real_trades.clear()
        self.real_win_rate = 0.0

    def can_trade(self) -> bool:
        return self.phase is TradePhase.REAL

    def get_virtual_stats(self) -> TradeStats:
        return TradeStats.from_outcomes(self._virtual_trades)

    def get_trade_stats(self) -> TradeStats:
        return TradeStats.from_outcomes(self._real_trades)

    @property
    def virtual_trade_count(self) -> int:
        return len(self._virtual_trades)

    @property
    def real_trade_count(self) -> int:
        return len(self._real_trades)

    def reset(self) -> None:
        """Restore construction-time state. The callback is kept."""
        self.phase = TradePhase.VIRTUAL
        self._virtual_trades.clear()
        self._real_trades = []
        self.virtual_win_rate = 0.0
        self.real_win_rate = 0.0

    def _demotion_reason(self, trades_count: int, win_rate: float) -> Optional[str]:
        band = self.config.interim_band
        if band is not None and band.contains(trades_count) and win_rate < band.min_win_rate:
            return (
                f"below interim floor {band.min_win_rate:.2%} "
                f"between {band.low_count} and {band.high_count} trades"
            )
        if (
            trades_count >= self.config.min_trade_count
            and win_rate < self.config.min_trade_win_rate
        ):
            return f"below floor {self.config.min_trade_win_rate:.2%}"
        return None

    def _notify(self, stats: TradeStats, left_phase: TradePhase) -> None:
        if self._on_trade_reach is not None:
            self._on_trade_reach(stats, left_phase.value)

    @staticmethod
    def _calculate_win_rate(trades) -> float:
        if not trades:
            return 0.0
        return sum(1 for is_win in trades if is_win) / len(trades)
