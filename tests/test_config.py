from __future__ import annotations

import os

import pytest

from client.config import CLIENT_CONFIG, ConfigError, load_config
from server.config import SERVER_CONFIG, load_server_config


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in (
        "CHAT_SERVER_HOST",
        "CHAT_SERVER_PORT",
        "CHAT_LOG_LEVEL",
        "SERVER_HOST",
        "SERVER_PORT",
        "SERVER_LOG_LEVEL",
        "CLIENT_SERVER_HOST",
        "CLIENT_SERVER_PORT",
        "CLIENT_POLL_INTERVAL",
        "CLIENT_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    return str(tmp_path / "missing.env")


def test_defaults_match_reference_deployment(clean_env):
    server = load_server_config(clean_env)
    client = load_config(clean_env)
    assert (server["host"], server["port"]) == ("127.0.0.1", 6000)
    assert (client["server_host"], client["server_port"]) == ("127.0.0.1", 6000)
    assert client["poll_interval"] == pytest.approx(0.1)


def test_shared_settings_feed_both_sides(clean_env, monkeypatch):
    monkeypatch.setenv("CHAT_SERVER_PORT", "6100")
    assert load_server_config(clean_env)["port"] == 6100
    assert load_config(clean_env)["server_port"] == 6100


def test_client_env_overrides_are_coerced(clean_env, monkeypatch):
    monkeypatch.setenv("CLIENT_SERVER_PORT", "7000")
    monkeypatch.setenv("CLIENT_POLL_INTERVAL", "0.25")
    load_config(clean_env)
    assert CLIENT_CONFIG["server_port"] == 7000
    assert CLIENT_CONFIG["poll_interval"] == pytest.approx(0.25)


def test_client_rejects_invalid_values(clean_env, monkeypatch):
    monkeypatch.setenv("CLIENT_POLL_INTERVAL", "0")
    with pytest.raises(ConfigError):
        load_config(clean_env)
    monkeypatch.setenv("CLIENT_POLL_INTERVAL", "soon")
    with pytest.raises(ConfigError):
        load_config(clean_env)


def test_dotenv_file_is_loaded(clean_env, monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SERVER_PORT=6200\n")
    monkeypatch.delenv("SERVER_PORT", raising=False)
    load_server_config(str(env_file))
    os.environ.pop("SERVER_PORT", None)
    assert SERVER_CONFIG["port"] == 6200
