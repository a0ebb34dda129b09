from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class Settings:
    """Shared baseline settings (both client/server build on top)."""

    server_host: str = "127.0.0.1"
    server_port: int = 6000
    log_level: str = "INFO"


SETTINGS = Settings()


def load_settings(env_path: str = ".env") -> Settings:
    """Load shared settings from env/.env."""
    if Path(env_path).exists():
        load_dotenv(env_path)
    defaults = Settings()
    SETTINGS.server_host = os.getenv("CHAT_SERVER_HOST", defaults.server_host)
    SETTINGS.server_port = int(os.getenv("CHAT_SERVER_PORT", defaults.server_port))
    SETTINGS.log_level = os.getenv("CHAT_LOG_LEVEL", defaults.log_level)
    return SETTINGS


__all__ = ["Settings", "SETTINGS", "load_settings"]
