# src/taskdesk/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..api.client import ApiClient
from ..stores.auth import AuthStore
from ..stores.categories import CategoriesStore
from ..stores.collaborations import CollaborationsStore
from ..stores.reports import ReportsStore
from ..stores.tasks import TasksStore
from .ports import TokenStorage
from .session import SessionController


@dataclass
class AppContainer:
    """
    Everything one running application needs, constructed once at startup
    (see cli.bootstrap.create_app) and torn down with `session.shutdown()`.
    """

    settings: object

    client: ApiClient
    token_storage: TokenStorage

    auth: AuthStore
    categories: CategoriesStore
    tasks: TasksStore
    collaborations: CollaborationsStore
    reports: ReportsStore

    session: SessionController
