# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskdesk.config import Settings

_VARS = (
    "TASKDESK_APP_NAME",
    "TASKDESK_LOG_LEVEL",
    "TASKDESK_API_BASE_URL",
    "VITE_API_BASE_URL",
    "TASKDESK_API_CONNECT_TIMEOUT_SECONDS",
    "TASKDESK_API_READ_TIMEOUT_SECONDS",
    "TASKDESK_DATA_DIR",
    "TASKDESK_TOKEN_PATH",
    "TASKDESK_TOKEN_KEY",
    "TASKDESK_DUE_SOON_DAYS",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()

    assert s.app_name == "taskdesk"
    assert s.log_level == "INFO"
    assert s.api_base_url == "http://localhost:3333"
    assert s.data_dir == Path(".local/taskdesk")
    assert s.token_path == Path(".local/taskdesk/session.json")
    assert s.token_key == "auth_token"
    assert s.due_soon_days == 3


def test_env_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("VITE_API_BASE_URL", "http://vite.example")
    clean_env.setenv("TASKDESK_DATA_DIR", str(tmp_path))
    clean_env.setenv("TASKDESK_DUE_SOON_DAYS", "7")
    clean_env.setenv("TASKDESK_LOG_LEVEL", "debug")

    s = Settings.from_env()

    assert s.api_base_url == "http://vite.example"
    assert s.token_path == tmp_path / "session.json"
    assert s.due_soon_days == 7
    assert s.log_level == "DEBUG"

    clean_env.setenv("TASKDESK_API_BASE_URL", "http://api.example")
    assert Settings.from_env().api_base_url == "http://api.example"


def test_bad_numbers_fall_back(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TASKDESK_DUE_SOON_DAYS", "soon")
    clean_env.setenv("TASKDESK_API_CONNECT_TIMEOUT_SECONDS", "30")
    clean_env.setenv("TASKDESK_API_READ_TIMEOUT_SECONDS", "2")

    s = Settings.from_env()

    assert s.due_soon_days == 3
    assert s.api_connect_timeout == 30.0
    assert s.api_read_timeout == 30.0
