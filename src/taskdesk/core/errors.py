# src/taskdesk/core/errors.py

"""
Error taxonomy of the remote client.

- ApiTransportError: the request never got an HTTP answer (DNS, refused, timeout).
- ApiHttpError: the server answered with a non-2xx status.
- UnauthenticatedError: the server answered 401; the session is no longer valid.
- ApiError (base): anything else the client could not turn into a response
  (e.g. an undecodable body).

Server-reported failures that come back as 2xx with `success: false` are not
exceptions; stores read them from the envelope.
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    def __init__(self, message: str = "", *, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload


class ApiTransportError(ApiError):
    pass


class ApiHttpError(ApiError):
    def __init__(self, status_code: int, message: str = "", *, payload: Any = None) -> None:
        super().__init__(message, payload=payload)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message}" if self.message else f"HTTP {self.status_code}"


class UnauthenticatedError(ApiHttpError):
    def __init__(self, message: str = "", *, payload: Any = None) -> None:
        super().__init__(401, message, payload=payload)


def get_error_message(err: BaseException | str | None, fallback: str = "Erro desconhecido") -> str:
    """Human-readable message for a failed call: server message first, then fallback."""
    if isinstance(err, str):
        return err or fallback
    if isinstance(err, ApiError):
        return err.message or fallback
    return fallback
