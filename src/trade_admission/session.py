"""Trade Session - per-trade handler of the trading loop.

Resolves settled contracts into outcomes, feeds the wired admission
controllers and answers whether the next order may risk real capital.
"""

import logging
from typing import Optional

from .config import AdmissionConfig
from .cooldown import TradeStateManager
from .models import (
    ContractStatus,
    TradingContext,
    UnresolvedOutcomeError,
    outcome_from_status,
)
from .notifications import AdmissionNotifier, TradeResultNotification
from .phase_gate import WinRatePhaseGate, TradeStats


logger = logging.getLogger(__name__)


class TradeSession:
    """Owns the admission controllers of one trading session.

    Either controller can be disabled through AdmissionConfig; the
    session allows a trade only when every wired controller does.
    """

    def __init__(
        self,
        config: Optional[AdmissionConfig] = None,
        notifier: Optional[AdmissionNotifier] = None,
    ):
        """Initialize with configuration.

        Args:
            config: Admission configuration (uses defaults if None)
            notifier: Message sink for transitions and results
        """
        self.config = config or AdmissionConfig()
        self.notifier = notifier or AdmissionNotifier(self.config.notifier)

        self.trade_state: Optional[TradeStateManager] = None
        if self.config.use_cooldown:
            self.trade_state = TradeStateManager(config=self.config.cooldown)

        self.phase_gate: Optional[WinRatePhaseGate] = None
        if self.config.use_phase_gate:
            self.phase_gate = WinRatePhaseGate(
                self.config.phase_gate,
                on_trade_reach=self._on_phase_transition,
            )

    def handle_trade_result(
        self,
        context: TradingContext,
        status: ContractStatus | str,
        profit: float = 0.0,
        stake: float = 0.0,
    ) -> bool:
        """Handle a contract update from the broker.

        Args:
            context: Trading loop state
            status: Contract status
            profit: Contract profit
            stake: Contract buy price

        Returns:
            True if the admission controllers were updated
        """
        if status in (ContractStatus.OPEN, ContractStatus.OPEN.value):
            return False

        try:
            is_win = outcome_from_status(status, profit)
        except UnresolvedOutcomeError as e:
            logger.warning(f"Contract {context.last_contract_id}: {e}, skipping update")
            context.is_trading = False
            context.last_contract_id = None
            return False

        context.is_trading = False
        context.last_contract_id = None
        context.consecutive_wins = context.consecutive_wins + 1 if is_win else 0

        self.update(is_win)

        self.notifier.notify_trade_result(TradeResultNotification(
            is_win=is_win,
            profit=profit,
            stake=stake,
            can_trade=self.can_trade(),
        ))
        return True

    def update(self, is_win: bool) -> None:
        """Feed one outcome to every wired controller exactly once."""
        if self.trade_state is not None:
            was_allowed = self.trade_state.can_trade()
            self.trade_state.update_trade_result(is_win)
            now_allowed = self.trade_state.can_trade()
            if was_allowed != now_allowed:
                self.notifier.notify_cooldown(
                    entered=not now_allowed,
                    loss_average=self.trade_state.get_loss_average(),
                )

        if self.phase_gate is not None:
            self.phase_gate.update(is_win)

        logger.debug(
            f"Outcome {'WIN' if is_win else 'LOSS'} recorded, "
            f"can_trade={self.can_trade()}"
        )

    def can_trade(self) -> bool:
        """Check whether the next order may risk real capital."""
        if self.trade_state is not None and not self.trade_state.can_trade():
            return False
        if self.phase_gate is not None and not self.phase_gate.can_trade():
            return False
        return True

    def should_place_order(self, context: TradingContext) -> bool:
        """Check loop state and admission before sending an order."""
        if not context.is_authorized or context.is_trading:
            return False
        return self.can_trade()

    def reset(self) -> None:
        """Restart the session with fresh controller state."""
        if self.trade_state is not None:
            self.trade_state.reset()
        if self.phase_gate is not None:
            self.phase_gate.reset()
        self.notifier.clear_queue()
        logger.info("Admission state reset")

    def get_status(self) -> dict:
        """Get current admission status.

        Returns:
            Dictionary with status information
        """
        status = {"can_trade": self.can_trade()}
        if self.trade_state is not None:
            controller = self.trade_state.controller
            status["cooldown"] = {
                "state": controller.state.value,
                "can_trade": self.trade_state.can_trade(),
                "loss_average": self.trade_state.get_loss_average(),
                "current_loss_count": self.trade_state.get_current_loss_count(),
            }
        if self.phase_gate is not None:
            status["phase_gate"] = {
                "phase": self.phase_gate.phase.value,
                "can_trade": self.phase_gate.can_trade(),
                "virtual_stats": self.phase_gate.get_virtual_stats().to_dict(),
                "trade_stats": self.phase_gate.get_trade_stats().to_dict(),
            }
        return status

    def _on_phase_transition(self, stats: TradeStats, left_phase: str) -> None:
        self.notifier.notify_phase_transition(stats, left_phase)
