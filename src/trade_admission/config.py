"""Configuration management module for the trade admission controller."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .cooldown.config import CooldownConfig
from .phase_gate.config import InterimBand, PhaseGateConfig, PromotionRule


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_int(value: Any) -> bool:
    # bool is an int subclass, JSON true/false is not a count
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return _is_int(value) or isinstance(value, float)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return a config section, rejecting anything but a JSON object."""
    section = data.get(key, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(f"Invalid configuration section '{key}' (must be an object)")
    return section


@dataclass
class NotifierConfig:
    """Notification (Telegram) configuration."""
    enabled: bool = False
    bot_token: str = ""
    chat_id: str = ""

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "chat_id": self.chat_id,
        }


@dataclass
class AdmissionConfig:
    """Main configuration container."""
    cooldown: CooldownConfig = field(default_factory=CooldownConfig)
    phase_gate: PhaseGateConfig = field(default_factory=PhaseGateConfig)
    notifier: NotifierConfig = field(default_factory=NotifierConfig)
    use_cooldown: bool = True
    use_phase_gate: bool = True
    log_level: str = "INFO"

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            "cooldown": self.cooldown.to_dict(),
            "phase_gate": self.phase_gate.to_dict(),
            "notifier": self.notifier.to_dict(),
            "use_cooldown": self.use_cooldown,
            "use_phase_gate": self.use_phase_gate,
            "log_level": self.log_level,
        }


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigManager:
    """Manages loading and validation of configuration."""

    def __init__(self, config_path: str | Path | None = None, load_env: bool = True):
        """Initialize configuration manager.

        Args:
            config_path: Path to config.json file. If None, uses default location.
            load_env: Whether to load .env file. Set to False for testing.
        """
        self.config_path = Path(config_path) if config_path else Path("config/config.json")
        self._config: AdmissionConfig | None = None
        self._load_env = load_env
        if load_env:
            load_dotenv()

    def load(self) -> AdmissionConfig:
        """Load configuration from file and environment variables.

        Returns:
            Loaded and validated AdmissionConfig object.

        Raises:
            ConfigValidationError: If fields are missing or invalid.
        """
        config_data = self._load_json()
        self._config = self._parse_config(config_data)
        self._override_from_env()
        self._validate()
        return self._config

    def _load_json(self) -> dict[str, Any]:
        """Load JSON configuration file."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path) as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON in {self.config_path}: {e}") from e

    def _parse_config(self, data: dict[str, Any]) -> AdmissionConfig:
        """Parse configuration dictionary into AdmissionConfig object."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be a JSON object")
        cooldown_data = _section(data, "cooldown")
        gate_data = _section(data, "phase_gate")
        notifier_data = _section(data, "notifier")

        return AdmissionConfig(
            cooldown=CooldownConfig(
                initial_loss_average=cooldown_data.get("initial_loss_average", 0),
                loss_average_floor=cooldown_data.get("loss_average_floor", 3),
            ),
            phase_gate=PhaseGateConfig(
                min_virtual_trade_count=gate_data.get("min_virtual_trade_count", 100),
                min_virtual_trade_win_rate=gate_data.get("min_virtual_trade_win_rate", 0.34),
                promotion_rule=self._parse_promotion_rule(
                    gate_data.get("promotion_rule", PromotionRule.LOW_WIN_RATE.value)
                ),
                min_trade_count=gate_data.get("min_trade_count", 100),
                min_trade_win_rate=gate_data.get("min_trade_win_rate", 0.485),
                interim_band=self._parse_interim_band(gate_data),
            ),
            notifier=NotifierConfig(
                enabled=notifier_data.get("enabled", False),
                bot_token=notifier_data.get("bot_token", ""),
                chat_id=notifier_data.get("chat_id", ""),
            ),
            use_cooldown=data.get("use_cooldown", True),
            use_phase_gate=data.get("use_phase_gate", True),
            log_level=data.get("log_level", "INFO"),
        )

    @staticmethod
    def _parse_promotion_rule(value: str) -> PromotionRule:
        try:
            return PromotionRule(str(value).lower())
        except ValueError:
            raise ConfigValidationError(
                f"Invalid promotion_rule '{value}', expected one of "
                f"{', '.join(rule.value for rule in PromotionRule)}"
            )

    @staticmethod
    def _parse_interim_band(gate_data: dict[str, Any]) -> InterimBand | None:
        # Missing key keeps the default band, explicit null disables it
        if "interim_band" not in gate_data:
            return InterimBand()
        band_data = gate_data["interim_band"]
        if band_data is None:
            return None
        if not isinstance(band_data, dict):
            raise ConfigValidationError(
                "Invalid configuration section 'phase_gate.interim_band' (must be an object or null)"
            )
        return InterimBand(
            low_count=band_data.get("low_count", 50),
            high_count=band_data.get("high_count", 70),
            min_win_rate=band_data.get("min_win_rate", 0.425),
        )

    def _override_from_env(self) -> None:
        """Override configuration values from environment variables."""
        if not self._config:
            return

        # Skip env overrides if load_env is False (for testing)
        if not self._load_env:
            return

        try:
            # Cooldown
            if seed := os.getenv("INITIAL_LOSS_AVERAGE"):
                self._config.cooldown.initial_loss_average = int(seed)
            if floor := os.getenv("LOSS_AVERAGE_FLOOR"):
                self._config.cooldown.loss_average_floor = int(floor)

            # Phase gate
            gate = self._config.phase_gate
            if virtual_count := os.getenv("MIN_VIRTUAL_TRADE_COUNT"):
                gate.min_virtual_trade_count = int(virtual_count)
            if virtual_rate := os.getenv("MIN_VIRTUAL_TRADE_WIN_RATE"):
                gate.min_virtual_trade_win_rate = float(virtual_rate)
            if trade_count := os.getenv("MIN_TRADE_COUNT"):
                gate.min_trade_count = int(trade_count)
            if trade_rate := os.getenv("MIN_TRADE_WIN_RATE"):
                gate.min_trade_win_rate = float(trade_rate)
        except ValueError as e:
            raise ConfigValidationError(f"Invalid numeric environment override: {e}") from e

        if rule := os.getenv("PROMOTION_RULE"):
            self._config.phase_gate.promotion_rule = self._parse_promotion_rule(rule)

        # Telegram
        if token := os.getenv("TELEGRAM_BOT_TOKEN"):
            self._config.notifier.bot_token = token
            self._config.notifier.enabled = True
        if chat_id := os.getenv("TELEGRAM_CHAT_ID"):
            self._config.notifier.chat_id = chat_id

        if log_level := os.getenv("LOG_LEVEL"):
            self._config.log_level = log_level

    def _validate(self) -> None:
        """Validate configuration types and values.

        Raises:
            ConfigValidationError: If validation fails.
        """
        if not self._config:
            raise ConfigValidationError("Configuration not loaded")

        invalid_fields = []
        cooldown = self._config.cooldown
        gate = self._config.phase_gate

        def check_count(name: str, value: Any, minimum: int) -> None:
            if not _is_int(value):
                invalid_fields.append(f"{name} (must be an integer)")
            elif value < minimum:
                invalid_fields.append(f"{name} (must be >= {minimum})")

        def check_rate(name: str, value: Any) -> None:
            if not _is_number(value):
                invalid_fields.append(f"{name} (must be a number)")
            elif not 0.0 <= value <= 1.0:
                invalid_fields.append(f"{name} (must be in [0, 1])")

        check_count("cooldown.initial_loss_average", cooldown.initial_loss_average, 0)
        check_count("cooldown.loss_average_floor", cooldown.loss_average_floor, 0)

        check_count("phase_gate.min_virtual_trade_count", gate.min_virtual_trade_count, 1)
        check_count("phase_gate.min_trade_count", gate.min_trade_count, 1)
        check_rate("phase_gate.min_virtual_trade_win_rate", gate.min_virtual_trade_win_rate)
        check_rate("phase_gate.min_trade_win_rate", gate.min_trade_win_rate)

        band = gate.interim_band
        if band is not None:
            check_count("phase_gate.interim_band.low_count", band.low_count, 0)
            check_count("phase_gate.interim_band.high_count", band.high_count, 0)
            check_rate("phase_gate.interim_band.min_win_rate", band.min_win_rate)
            if (
                _is_int(band.low_count)
                and _is_int(band.high_count)
                and band.low_count >= band.high_count
            ):
                invalid_fields.append("phase_gate.interim_band (low_count must be < high_count)")

        for name in ("use_cooldown", "use_phase_gate"):
            if not isinstance(getattr(self._config, name), bool):
                invalid_fields.append(f"{name} (must be true or false)")

        log_level = self._config.log_level
        if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
            invalid_fields.append(f"log_level (one of {', '.join(LOG_LEVELS)})")

        notifier = self._config.notifier
        if not isinstance(notifier.enabled, bool):
            invalid_fields.append("notifier.enabled (must be true or false)")
        for name in ("bot_token", "chat_id"):
            if not isinstance(getattr(notifier, name), str):
                invalid_fields.append(f"notifier.{name} (must be a string)")
        if notifier.enabled is True:
            if not notifier.bot_token:
                invalid_fields.append("notifier.bot_token")
            if not notifier.chat_id:
                invalid_fields.append("notifier.chat_id")

        if invalid_fields:
            raise ConfigValidationError(
                f"Missing or invalid configuration fields: {', '.join(invalid_fields)}"
            )

    @property
    def config(self) -> AdmissionConfig:
        """Get loaded configuration."""
        if not self._config:
            raise ConfigValidationError("Configuration not loaded. Call load() first.")
        return self._config

    @property
    def log_level(self) -> int:
        """Loaded log level as a logging module constant."""
        return getattr(logging, self.config.log_level.upper())
