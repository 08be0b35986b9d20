# src/taskdesk/storage/token_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> dict[str, Any]:
    raw = path.read_text("utf-8")
    val = json.loads(raw)
    if isinstance(val, dict):
        return val
    raise ValueError("Expected JSON object")


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    tmp = path.with_suffix(".tmp")
    tmp.write_text(json.dumps(data, ensure_ascii=False), "utf-8")
    os.replace(tmp, path)
    with contextlib.suppress(OSError):
        # Best-effort: not critical on Windows or restricted FS.
        os.chmod(path, 0o600)


class FileTokenStorage:
    """
    Session token persisted in a small JSON file: {"<key>": "<token>"}.

    The file contains a bearer credential and must live under a gitignored dir.
    Other keys in the file are preserved on write.
    """

    def __init__(self, path: str | Path, key: str = "auth_token") -> None:
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            return _load_json(self._path)
        except (OSError, ValueError):
            logger.warning("Unreadable session file %s, treating as anonymous", self._path)
            return {}

    def get(self) -> str | None:
        token = self._read().get(self._key)
        if isinstance(token, str) and token.strip():
            return token
        return None

    def set(self, token: str) -> None:
        data = self._read()
        data[self._key] = token
        self._path.parent.mkdir(parents=True, exist_ok=True)
        _atomic_write_json(self._path, data)
        logger.debug("Session token saved to %s", self._path)

    def clear(self) -> None:
        data = self._read()
        if self._key not in data:
            return
        data.pop(self._key, None)
        if data:
            _atomic_write_json(self._path, data)
        else:
            with contextlib.suppress(FileNotFoundError):
                self._path.unlink()
        logger.debug("Session token removed from %s", self._path)


class MemoryTokenStorage:
    """Process-local token storage (tests, ephemeral sessions)."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token or None

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None
