# src/taskdesk/core/session.py

"""
Session controller.

Owns what happens when the server stops accepting our token: the client only
reports a 401 (UnauthenticatedError); this controller clears the session and
sends the user back to the login view through the Navigator port.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from .errors import UnauthenticatedError
from .ports import Navigator, TokenStorage

logger = logging.getLogger(__name__)


class _Resettable(Protocol):
    def reset(self) -> None: ...


class _Auth(Protocol):
    async def initialize(self) -> None: ...
    async def logout(self) -> None: ...
    def clear(self) -> None: ...


class _Client(Protocol):
    def add_unauthenticated_listener(self, listener) -> None: ...
    def remove_unauthenticated_listener(self, listener) -> None: ...
    async def aclose(self) -> None: ...


class LoggingNavigator:
    """Navigator for headless runs: just records that a login is required."""

    def go_to_login(self) -> None:
        logger.warning("Session expired, login required")


class SessionController:
    def __init__(
        self,
        client: _Client,
        token_storage: TokenStorage,
        auth: _Auth,
        navigator: Navigator | None = None,
        stores: Iterable[_Resettable] = (),
    ) -> None:
        self._client = client
        self._tokens = token_storage
        self._auth = auth
        self._navigator = navigator or LoggingNavigator()
        self._stores = list(stores)
        self._closed = False
        client.add_unauthenticated_listener(self._on_unauthenticated)

    def _on_unauthenticated(self, err: UnauthenticatedError) -> None:
        logger.info("Unauthenticated response (%s), clearing session", err.message or "401")
        self._tokens.clear()
        self._auth.clear()
        self.clear_data()
        self._navigator.go_to_login()

    async def start(self) -> None:
        await self._auth.initialize()

    def clear_data(self) -> None:
        for store in self._stores:
            store.reset()

    async def logout(self) -> None:
        await self._auth.logout()
        self.clear_data()

    async def shutdown(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._client.remove_unauthenticated_listener(self._on_unauthenticated)
        await self._client.aclose()
