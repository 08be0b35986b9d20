# src/taskdesk/stores/base.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..core.errors import ApiError, get_error_message

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[], None]


@dataclass(slots=True)
class ActionResult(Generic[T]):
    """Uniform outcome of a store action. Callers branch on `success`, never on exceptions."""

    success: bool
    data: T | None = None
    error: str | None = None


class ServerRejected(ApiError):
    """Raised inside a store when the envelope says success=false."""


class Store:
    """
    Common state of every store: a `loading` flag, the last `error`, and
    change listeners so a presentation layer can re-render.

    Every action follows the same shape:

        with self._action():
            response = await self._api.something()
            ...mutate state...

    `_action` sets loading and clears error on entry, and always resets loading.
    Errors are caught by the action itself (see `_fail`).
    """

    def __init__(self) -> None:
        self.loading = False
        self.error: str | None = None
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Store listener failed (%s)", type(self).__name__)

    @contextlib.contextmanager
    def _action(self, *, clear_error: bool = True) -> Iterator[None]:
        self.loading = True
        if clear_error:
            self.error = None
        self._changed()
        try:
            yield
        finally:
            self.loading = False
            self._changed()

    def _fail(self, err: ApiError, fallback: str) -> str:
        self.error = get_error_message(err, fallback)
        logger.info("%s: %s (%s)", type(self).__name__, self.error, err.__class__.__name__)
        return self.error

    @staticmethod
    def _reject(message: str | None, fallback: str) -> ServerRejected:
        return ServerRejected(message or fallback)
