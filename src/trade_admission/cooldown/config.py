"""Cooldown Controller Configuration.

Defines the parameters of the loss-streak cooldown controller.
"""

from dataclasses import dataclass


@dataclass
class CooldownConfig:
    """Configuration for the loss-streak cooldown controller.

    Attributes:
        initial_loss_average: Seed for the streak average, used until the
            first loss recomputes it from observed history
        loss_average_floor: Minimum streak average ever reported
    """
    initial_loss_average: int = 0
    loss_average_floor: int = 3

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            "initial_loss_average": self.initial_loss_average,
            "loss_average_floor": self.loss_average_floor,
        }


# Default configuration instance
DEFAULT_COOLDOWN_CONFIG = CooldownConfig()
