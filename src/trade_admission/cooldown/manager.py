"""Trade state manager facade over the cooldown controller."""

from typing import Optional

from .config import CooldownConfig
from .controller import CooldownController


class TradeStateManager:
    """Public API of the loss-streak cooldown controller.

    The trading loop calls update_trade_result() after every settled
    trade and can_trade() before placing the next order.
    """

    def __init__(
        self,
        initial_loss_average: int = 0,
        loss_average_floor: int = 3,
        config: Optional[CooldownConfig] = None,
    ):
        """Initialize trade state manager.

        Args:
            initial_loss_average: Seed for the streak average
            loss_average_floor: Minimum streak average
            config: Full cooldown configuration, overrides the two
                arguments above when given
        """
        if config is None:
            config = CooldownConfig(
                initial_loss_average=initial_loss_average,
                loss_average_floor=loss_average_floor,
            )
        self._controller = CooldownController(config)

    @property
    def controller(self) -> CooldownController:
        return self._controller

    def update_trade_result(self, is_win: bool) -> None:
        self._controller.update(is_win)

    def can_trade(self) -> bool:
        return self._controller.can_trade()

    def reset(self) -> None:
        self._controller.reset()

    def get_loss_average(self) -> int:
        return self._controller.loss_average()

    def get_current_loss_count(self) -> int:
        return self._controller.current_loss_count()
