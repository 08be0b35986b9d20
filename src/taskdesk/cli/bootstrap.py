# src/taskdesk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the token storage, HTTP client, stores and session controller into AppContainer.

Nothing here is a module-level singleton; every call builds a fresh container.
"""

from __future__ import annotations

import logging

import httpx

from ..api.client import ApiClient
from ..config import get_settings
from ..core.ports import Navigator, TokenStorage
from ..core.session import SessionController
from ..core.state import AppContainer
from ..storage.token_store import FileTokenStorage
from ..stores.auth import AuthStore
from ..stores.categories import CategoriesStore
from ..stores.collaborations import CollaborationsStore
from ..stores.reports import ReportsStore
from ..stores.tasks import TasksStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.token_path.parent.mkdir(parents=True, exist_ok=True)


def create_app(
    *,
    settings=None,
    navigator: Navigator | None = None,
    token_storage: TokenStorage | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppContainer:
    """
    Build an AppContainer. Every collaborator is injectable; `settings` defaults
    to get_settings() and `token_storage` to the session file it names.
    """
    if settings is None:
        settings = get_settings()

    if token_storage is None:
        _ensure_local_dirs(settings)
        token_storage = FileTokenStorage(settings.token_path, key=settings.token_key)

    client = ApiClient.from_settings(settings, token_storage, transport=transport)

    auth = AuthStore(client, token_storage)
    categories = CategoriesStore(client)
    tasks = TasksStore(client)
    collaborations = CollaborationsStore(client)
    reports = ReportsStore(client)

    session = SessionController(
        client,
        token_storage,
        auth,
        navigator=navigator,
        stores=(categories, tasks, collaborations, reports),
    )

    logger.info("App ready api=%s session=%s", client.base_url, "restored" if auth.token else "anonymous")

    return AppContainer(
        settings=settings,
        client=client,
        token_storage=token_storage,
        auth=auth,
        categories=categories,
        tasks=tasks,
        collaborations=collaborations,
        reports=reports,
        session=session,
    )
