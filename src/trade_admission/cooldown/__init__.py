"""Loss-Streak Cooldown Module.

Withholds real capital after a loss that follows a win, for as many
further losses as the historical losing-streak average.
"""

from .config import CooldownConfig, DEFAULT_COOLDOWN_CONFIG
from .loss_tracker import LossStreakTracker
from .virtual_loss import VirtualLossCounter
from .controller import CooldownController, CooldownState
from .manager import TradeStateManager

__all__ = [
    # Facade
    "TradeStateManager",
    # State machine
    "CooldownController",
    "CooldownState",
    # Helpers
    "LossStreakTracker",
    "VirtualLossCounter",
    # Configuration
    "CooldownConfig",
    "DEFAULT_COOLDOWN_CONFIG",
]
