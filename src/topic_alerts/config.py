"""Configuration loading and validation."""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = "~/.topic-alerts/config.yaml"


class AlertConfig(BaseModel):
    topic: str
    test: str
    message: str = ""  # Empty = rule matches but nothing is sent

    @field_validator("topic", "test")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value


class EventsConfig(BaseModel):
    subscriptions: list[str] = Field(default_factory=list)
    alerts: list[AlertConfig] = Field(default_factory=list)
    motd: bool = True
    motd_on_start: bool = True
    mu_distance: str = "km"
    mu_temperature: str = "°C"
    motd_file: str = "motd.txt"  # Relative to the config file directory


class NotificationsConfig(BaseModel):
    default_type: str = "telegram"  # "telegram" | "webhook" | "local"
    telegram_bot_token: str = ""
    telegram_owner_id: str = ""  # Default recipient, only chat the bot answers
    webhook_url: str = ""

    @field_validator(
        "telegram_bot_token", "telegram_owner_id", "webhook_url", mode="before"
    )
    @classmethod
    def _unset_is_empty(cls, value):
        # An unset ${env:VAR} leaves "key:" behind, which YAML reads as null
        if value is None:
            return ""
        return str(value)


class AppConfig(BaseModel):
    name: str = "topic-alerts"
    alerts_grace_seconds: float = 5.0  # Startup delay before alerts are enabled
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    base_dir: str = ""  # Filled by load_config, used to resolve motd_file

    def motd_path(self) -> Path:
        path = Path(self.events.motd_file).expanduser()
        if not path.is_absolute() and self.base_dir:
            path = Path(self.base_dir) / path
        return path

    def validate_for_run(self) -> None:
        """Check the settings that only matter once messages are actually sent."""
        notifications = self.notifications
        if notifications.default_type == "telegram":
            if not notifications.telegram_bot_token:
                raise ConfigError("telegram_bot_token not defined")
            if not notifications.telegram_owner_id:
                raise ConfigError("telegram_owner_id not defined")
        elif notifications.default_type == "webhook":
            if not notifications.webhook_url:
                raise ConfigError("webhook_url not defined")


def _interpolate_env_vars(text: str) -> str:
    """Replace ${env:VAR_NAME} with environment variable values.

    Plain ${name} placeholders belong to message templates and are kept.
    """

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        return os.environ.get(var_name, "")

    return re.sub(r"\$\{env:(\w+)\}", replacer, text)


def _apply_env_fallbacks(config: AppConfig) -> AppConfig:
    """Fill empty notification settings from the environment (Docker/cloud)."""
    notifications = config.notifications
    if not notifications.telegram_bot_token:
        notifications.telegram_bot_token = os.environ.get("TELEGRAM_BOT_TOKEN", "")
    if not notifications.telegram_owner_id:
        notifications.telegram_owner_id = os.environ.get("TELEGRAM_OWNER_ID", "")
    if not notifications.webhook_url:
        notifications.webhook_url = os.environ.get("WEBHOOK_URL", "")
    return config


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML (or JSON) file, env vars, or defaults.

    A missing default file yields defaults; a missing explicit file, a
    malformed file or an invalid field raises ConfigError.
    """
    if path is None:
        path = Path(DEFAULT_CONFIG_PATH).expanduser()
        if not path.exists():
            return _apply_env_fallbacks(AppConfig())
    else:
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    interpolated = _interpolate_env_vars(raw_text)
    try:
        data = yaml.safe_load(interpolated)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    data.setdefault("base_dir", str(path.resolve().parent))
    try:
        config = AppConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}:\n{e}") from e
    return _apply_env_fallbacks(config)


def load_motd_template(config: AppConfig) -> str:
    """Read the raw MOTD template text. Missing file = empty template."""
    path = config.motd_path()
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")
