from __future__ import annotations

import logging
import os
from typing import Any, Dict

from shared.protocol import DEFAULT_POLL_INTERVAL
from shared.settings import load_settings

DEFAULT_CONFIG: Dict[str, Any] = {
    "server_host": "127.0.0.1",
    "server_port": 6000,
    "poll_interval": DEFAULT_POLL_INTERVAL,
    "reconnect_backoff": 1.0,
    "max_reconnect_backoff": 30.0,
    "max_reconnect_retries": 0,
    "log_level": "WARNING",
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    settings = load_settings(env_path)
    defaults = {
        **DEFAULT_CONFIG,
        "server_host": settings.server_host,
        "server_port": settings.server_port,
    }

    for key, default_value in defaults.items():
        env_key = f"CLIENT_{key.upper()}"
        value = os.getenv(env_key, default_value)
        CLIENT_CONFIG[key] = _coerce_type(value, type(DEFAULT_CONFIG[key]))

    _validate_config()
    logging.getLogger().setLevel(CLIENT_CONFIG["log_level"])
    return CLIENT_CONFIG


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def _validate_config() -> None:
    if not (1 <= int(CLIENT_CONFIG["server_port"]) <= 65535):
        raise ConfigError("server_port must be between 1 and 65535")
    if CLIENT_CONFIG["poll_interval"] <= 0:
        raise ConfigError("poll_interval must be positive")
    if CLIENT_CONFIG["max_reconnect_retries"] < 0:
        raise ConfigError("max_reconnect_retries must not be negative")


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "ConfigError", "load_config"]
