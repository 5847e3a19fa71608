"""Admission notification formatting and queueing.

Formats phase-transition, cooldown and trade-result messages. Messages
are only queued here; delivery (e.g. Telegram) happens outside the
controller call stack.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..config import NotifierConfig
from ..phase_gate.models import TradeStats


@dataclass
class TradeResultNotification:
    """Trade result notification data."""
    is_win: bool
    profit: float
    stake: float
    can_trade: bool
    timestamp: datetime = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()


class AdmissionNotifier:
    """Formats and queues admission notifications."""

    def __init__(self, config: Optional[NotifierConfig] = None):
        """Initialize notifier.

        Args:
            config: Notifier configuration
        """
        self.config = config or NotifierConfig()
        self._message_queue: List[str] = []

    def format_phase_transition(self, stats: TradeStats, left_phase: str) -> str:
        """Format a phase gate transition message.

        Args:
            stats: Snapshot of the window of the phase being left
            left_phase: "virtual" (promotion) or "real" (demotion)

        Returns:
            Formatted message string
        """
        if left_phase == "virtual":
            header = "🟢 Real trading enabled"
            window = "Virtual"
        else:
            header = "🔴 Real trading revoked"
            window = "Real"

        return (
            f"{header}\n"
            f"{window} trades: {stats.total_trades}\n"
            f"Wins: {stats.win} | Losses: {stats.loss}\n"
            f"Win rate: {stats.win_rate * 100:.1f}%"
        )

    def format_cooldown(self, entered: bool, loss_average: int) -> str:
        if entered:
            return (
                f"⏸️ Cooldown started\n"
                f"Waiting for {loss_average} virtual losses"
            )
        return "▶️ Cooldown finished, trading resumed"

    def format_trade_result(self, notification: TradeResultNotification) -> str:
        """Format trade result message.

        Args:
            notification: Trade result data

        Returns:
            Formatted message string
        """
        if notification.is_win:
            header = "✅ Trade won"
            amount = f"Profit: ${notification.profit:,.2f}"
        else:
            header = "❌ Trade lost"
            amount = f"Loss: ${notification.stake:,.2f}"
        permission = "allowed" if notification.can_trade else "suppressed"

        return (
            f"{header}\n"
            f"{amount}\n"
            f"Next trade: {permission}\n"
            f"Time: {notification.timestamp.strftime('%Y-%m-%d %H:%M:%S')}"
        )

    def send(self, message: str) -> bool:
        """Queue a message for delivery.

        Returns:
            True if queued
        """
        if not self.config.enabled:
            return False
        self._message_queue.append(message)
        return True

    def notify_phase_transition(self, stats: TradeStats, left_phase: str) -> bool:
        """Phase gate callback: queue a transition message."""
        return self.send(self.format_phase_transition(stats, left_phase))

    def notify_cooldown(self, entered: bool, loss_average: int) -> bool:
        return self.send(self.format_cooldown(entered, loss_average))

    def notify_trade_result(self, notification: TradeResultNotification) -> bool:
        return self.send(self.format_trade_result(notification))

    def get_queued_messages(self) -> List[str]:
        """Get queued messages without removing them."""
        return self._message_queue.copy()

    def drain(self) -> List[str]:
        """Return and clear queued messages."""
        messages = self._message_queue
        self._message_queue = []
        return messages

    def clear_queue(self) -> None:
        """Clear message queue."""
        self._message_queue = []
