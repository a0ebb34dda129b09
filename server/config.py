from __future__ import annotations

import os
from typing import Any, Dict

from shared.settings import load_settings

DEFAULT_SERVER_CONFIG: Dict[str, Any] = {
    "host": "127.0.0.1",
    "port": 6000,
    "log_level": "INFO",
}

SERVER_CONFIG = DEFAULT_SERVER_CONFIG.copy()


def load_server_config(env_path: str = ".env") -> Dict[str, Any]:
    settings = load_settings(env_path)
    SERVER_CONFIG["host"] = os.getenv("SERVER_HOST", settings.server_host)
    SERVER_CONFIG["port"] = int(os.getenv("SERVER_PORT", settings.server_port))
    SERVER_CONFIG["log_level"] = os.getenv("SERVER_LOG_LEVEL", settings.log_level)
    return SERVER_CONFIG


__all__ = ["DEFAULT_SERVER_CONFIG", "SERVER_CONFIG", "load_server_config"]
