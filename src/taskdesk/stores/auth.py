# src/taskdesk/stores/auth.py

"""
Authentication state.

    ANONYMOUS --login/register--> AUTHENTICATING --token+user--> AUTHENTICATED
        ^                                                              |
        +------------- logout / profile fetch rejected ---------------+
"""

from __future__ import annotations

import logging
from enum import Enum

from ..core.errors import ApiError
from ..core.models import LoginCredentials, ProfileUpdate, RegisterData, User
from ..core.ports import AuthApi, TokenStorage
from .base import ActionResult, Store

logger = logging.getLogger(__name__)


class AuthStatus(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class AuthStore(Store):
    def __init__(self, api: AuthApi, token_storage: TokenStorage) -> None:
        super().__init__()
        self._api = api
        self._tokens = token_storage
        self.user: User | None = None
        self.token: str | None = token_storage.get()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    @property
    def status(self) -> AuthStatus:
        if self.is_authenticated:
            return AuthStatus.AUTHENTICATED
        if self.loading:
            return AuthStatus.AUTHENTICATING
        return AuthStatus.ANONYMOUS

    def _set_token(self, token: str) -> None:
        self.token = token
        self._tokens.set(token)

    def clear(self) -> None:
        """Wipe the session: in-memory user/token and the persisted token."""
        self.user = None
        self.token = None
        self._tokens.clear()
        self._changed()

    async def login(self, credentials: LoginCredentials) -> ActionResult[User]:
        with self._action():
            try:
                response = await self._api.login(credentials)
                if not response.token:
                    raise self._reject(response.message, "Login failed")
                self.user = response.user
                self._set_token(response.token)
                logger.info("Logged in as %s", credentials.email)
                return ActionResult(success=True, data=self.user)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Login failed"))

    async def register(self, data: RegisterData) -> ActionResult[User]:
        with self._action():
            try:
                response = await self._api.register(data)
                if not response.success:
                    raise self._reject(response.message, "Registration failed")
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Registration failed"))

            # Registration alone does not open a session.
            return await self.login(LoginCredentials(email=data.email, password=data.password))

    async def fetch_profile(self) -> None:
        if not self.token:
            return
        with self._action(clear_error=False):
            try:
                profile = await self._api.get_profile()
            except ApiError as e:
                logger.info("Profile fetch failed (%s), clearing session", e.__class__.__name__)
                self.clear()
                return
            if profile is not None:
                self.user = profile

    async def update_profile(self, data: ProfileUpdate) -> ActionResult[User]:
        with self._action():
            try:
                response = await self._api.update_profile(data)
                if not response.success:
                    raise self._reject(response.message, "Profile update failed")
                if response.data is not None:
                    self.user = response.data
                return ActionResult(success=True, data=self.user)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Profile update failed"))

    async def logout(self) -> None:
        try:
            if self.token:
                await self._api.logout()
        except ApiError as e:
            logger.warning("Logout error: %s", e)
        finally:
            self.clear()

    async def initialize(self) -> None:
        """Reconcile a restart with a previously persisted session."""
        if self.token:
            await self.fetch_profile()
