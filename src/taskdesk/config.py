# src/taskdesk/config.py

"""
Application settings, read once from TASKDESK_* environment variables.

A local .env file is loaded first (python-dotenv, never overriding variables
already set). Nothing here is secret: the session token lives in the token
file, not in the environment.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from dotenv import load_dotenv

ENV_PREFIX = "TASKDESK"
DEFAULT_API_BASE_URL = "http://localhost:3333"

N = TypeVar("N", int, float)

load_dotenv(override=False)


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _raw(*names: str) -> str | None:
    """First non-blank value among `names`, or None."""
    for name in names:
        value = os.getenv(name)
        if value is not None and value.strip():
            return value.strip()
    return None


def _env(name: str, default: str) -> str:
    return _raw(name) or default


def _env_number(name: str, default: N, cast: Callable[[str], N]) -> N:
    raw = _raw(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = _raw(name)
    return Path(raw).expanduser() if raw else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Remote API ----
    api_base_url: str
    api_connect_timeout: float
    api_read_timeout: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    token_path: Path
    token_key: str

    # ---- Presentation ----
    due_soon_days: int

    @classmethod
    def from_env(cls) -> Settings:
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdesk"))
        connect_timeout = _env_number(_k("API_CONNECT_TIMEOUT_SECONDS"), 5.0, float)
        read_timeout = _env_number(_k("API_READ_TIMEOUT_SECONDS"), 25.0, float)

        return cls(
            app_name=_env(_k("APP_NAME"), "taskdesk"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            # VITE_API_BASE_URL lets the web front-end's .env be reused as is.
            api_base_url=_raw(_k("API_BASE_URL"), "VITE_API_BASE_URL") or DEFAULT_API_BASE_URL,
            api_connect_timeout=connect_timeout,
            api_read_timeout=max(read_timeout, connect_timeout),
            data_dir=data_dir,
            token_path=_env_path(_k("TOKEN_PATH"), data_dir / "session.json"),
            token_key=_env(_k("TOKEN_KEY"), "auth_token"),
            due_soon_days=max(0, _env_number(_k("DUE_SOON_DAYS"), 3, int)),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Settings for this process, built from the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
