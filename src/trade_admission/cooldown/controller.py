"""Cooldown controller module.

Suppresses real trading after a loss that follows a win, until a run of
losses as long as the historical streak average has been observed.
"""

import logging
from enum import Enum
from typing import Optional

from .config import CooldownConfig
from .loss_tracker import LossStreakTracker
from .virtual_loss import VirtualLossCounter


logger = logging.getLogger(__name__)


class CooldownState(Enum):
    """Cooldown controller state."""
    NORMAL = "normal"              # trading allowed, streak history updated
    VIRTUAL_LOSS = "virtual_loss"  # trading suppressed, counting losses


class CooldownController:
    """Combines a LossStreakTracker and a VirtualLossCounter into a
    single can-trade signal.

    Transitions:
    - NORMAL + loss after a win since the last cooldown exit: enter
      VIRTUAL_LOSS and block trading
    - NORMAL + win: remember that a win happened
    - VIRTUAL_LOSS + any outcome: count it; once the virtual loss count
      reaches the streak average, return to NORMAL and allow trading

    Outcomes seen in VIRTUAL_LOSS are not fed to the streak tracker.
    """

    def __init__(self, config: Optional[CooldownConfig] = None):
        """Initialize cooldown controller.

        Args:
            config: Cooldown configuration. Uses defaults if None.
        """
        self.config = config or CooldownConfig()
        self._tracker = LossStreakTracker(
            initial_average=self.config.initial_loss_average,
            floor=self.config.loss_average_floor,
        )
        self._virtual_loss = VirtualLossCounter()
        self.in_virtual_loss: bool = False
        self.has_won_since_virtual_exit: bool = False
        self._can_trade: bool = True

    @property
    def state(self) -> CooldownState:
        """Current controller state."""
        if self.in_virtual_loss:
            return CooldownState.VIRTUAL_LOSS
        return CooldownState.NORMAL

    def update(self, is_win: bool) -> None:
        """Feed one settled trade outcome.

        Args:
            is_win: True for a winning trade
        """
        if self.in_virtual_loss:
            self._virtual_loss.record(is_win)
            count = self._virtual_loss.count()
            average = self._tracker.average()
            logger.debug(f"Virtual loss count {count}/{average}")
            if count >= average:
                self.in_virtual_loss = False
                self._can_trade = True
                self._virtual_loss.reset()
                logger.info(
                    f"Cooldown finished after {count} virtual losses "
                    f"(average {average}), trading resumed"
                )
            return

        self._tracker.record(is_win)
        if is_win:
            self.has_won_since_virtual_exit = True
        elif self.has_won_since_virtual_exit:
            self.in_virtual_loss = True
            self._can_trade = False
            self.has_won_since_virtual_exit = False
            logger.info(
                f"Loss after win, entering cooldown until "
                f"{self._tracker.average()} virtual losses"
            )

    def can_trade(self) -> bool:
        return self._can_trade

    def loss_average(self) -> int:
        """Streak average used as the cooldown length."""
        return self._tracker.average()

    def current_loss_count(self) -> int:
        """Losses counted so far in the current cooldown."""
        return self._virtual_loss.count()

    def reset(self) -> None:
        """Restore construction-time state."""
        self._tracker.reset()
        self._virtual_loss.reset()
        self.in_virtual_loss = False
        self.has_won_since_virtual_exit = False
        self._can_trade = True
