# tests/test_token_store.py

from __future__ import annotations

import json
from pathlib import Path

from taskdesk.storage.token_store import FileTokenStorage


def test_file_token_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "session.json"
    store = FileTokenStorage(path)

    assert store.get() is None

    store.set("tok-1")
    assert store.get() == "tok-1"
    assert json.loads(path.read_text("utf-8")) == {"auth_token": "tok-1"}

    # A fresh instance reads what a previous run persisted.
    assert FileTokenStorage(path).get() == "tok-1"

    store.clear()
    assert store.get() is None
    assert not path.exists()


def test_clear_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"auth_token": "t", "theme": "dark"}), "utf-8")

    FileTokenStorage(path).clear()

    assert json.loads(path.read_text("utf-8")) == {"theme": "dark"}


def test_corrupt_file_reads_as_anonymous(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{not json", "utf-8")

    assert FileTokenStorage(path).get() is None
