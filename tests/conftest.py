# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdesk.storage.token_store import MemoryTokenStorage
from taskdesk.stores.auth import AuthStore
from taskdesk.stores.categories import CategoriesStore
from taskdesk.stores.collaborations import CollaborationsStore
from taskdesk.stores.reports import ReportsStore
from taskdesk.stores.tasks import TasksStore

from .fakes import FakeApi, FakeNavigator


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """Settings stand-in accepted by create_app and ApiClient.from_settings."""
    return SimpleNamespace(
        app_name="taskdesk-test",
        log_level="DEBUG",
        api_base_url="http://api.test",
        api_connect_timeout=1.0,
        api_read_timeout=1.0,
        data_dir=tmp_path,
        token_path=tmp_path / "session.json",
        token_key="auth_token",
        due_soon_days=3,
    )


@pytest.fixture()
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture()
def tokens() -> MemoryTokenStorage:
    return MemoryTokenStorage()


@pytest.fixture()
def navigator() -> FakeNavigator:
    return FakeNavigator()


@pytest.fixture()
def auth(api: FakeApi, tokens: MemoryTokenStorage) -> AuthStore:
    return AuthStore(api, tokens)


@pytest.fixture()
def categories(api: FakeApi) -> CategoriesStore:
    return CategoriesStore(api)


@pytest.fixture()
def tasks(api: FakeApi) -> TasksStore:
    return TasksStore(api)


@pytest.fixture()
def collaborations(api: FakeApi) -> CollaborationsStore:
    return CollaborationsStore(api)


@pytest.fixture()
def reports(api: FakeApi) -> ReportsStore:
    return ReportsStore(api)
