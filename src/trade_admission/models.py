"""Core data models for the trade admission controller."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class ContractStatus(Enum):
    """Broker contract status."""
    OPEN = "open"
    WON = "won"
    LOST = "lost"
    SOLD = "sold"
    CANCELLED = "cancelled"


class UnresolvedOutcomeError(ValueError):
    """Raised when a contract status does not settle to a win or a loss."""
    pass


def outcome_from_status(status: ContractStatus | str, profit: float = 0.0) -> bool:
    """Resolve a settled contract into a win/loss outcome.

    Args:
        status: Contract status (enum or raw broker string)
        profit: Contract profit, used for contracts sold before expiry

    Returns:
        True for a win, False for a loss

    Raises:
        UnresolvedOutcomeError: If the contract is open, cancelled or
            carries an unknown status
    """
    try:
        status = ContractStatus(status)
    except ValueError:
        raise UnresolvedOutcomeError(f"Unknown contract status: {status!r}")

    if status is ContractStatus.WON:
        return True
    if status is ContractStatus.LOST:
        return False
    if status is ContractStatus.SOLD:
        return profit >= 0
    raise UnresolvedOutcomeError(f"Contract status {status.value} has no outcome")


@dataclass
class TradingContext:
    """Per-connection state of the trading loop.

    Passed by reference to the per-trade handler instead of living in
    module-level variables.
    """
    is_authorized: bool = False
    is_trading: bool = False
    last_contract_id: Optional[int] = None
    consecutive_wins: int = 0
    active_subscriptions: List[Any] = field(default_factory=list)

    def clear(self) -> None:
        """Drop subscriptions and in-flight state after a disconnect."""
        self.active_subscriptions = []
        self.is_trading = False
        self.is_authorized = False
        self.last_contract_id = None
