# tests/test_auth_store.py

from __future__ import annotations

import pytest

from taskdesk.core.errors import ApiHttpError, ApiTransportError
from taskdesk.core.models import AuthResponse, LoginCredentials, ProfileUpdate, RegisterData, User
from taskdesk.storage.token_store import MemoryTokenStorage
from taskdesk.stores.auth import AuthStatus, AuthStore

from .fakes import FakeApi, ok, rejected, user_payload

CREDS = LoginCredentials(email="ana@example.com", password="secret")


def _auth_ok(token: str = "tok-1") -> AuthResponse:
    return AuthResponse(success=True, message="ok", token=token, user=User.from_api(user_payload()))


@pytest.mark.asyncio
async def test_login_success_persists_token(auth: AuthStore, api: FakeApi, tokens: MemoryTokenStorage) -> None:
    api.queue("login", _auth_ok("tok-1"))

    result = await auth.login(CREDS)

    assert result.success is True
    assert result.error is None
    assert auth.is_authenticated is True
    assert auth.status is AuthStatus.AUTHENTICATED
    assert auth.token == "tok-1"
    assert tokens.get() == "tok-1"
    assert auth.user is not None and auth.user.email == "ana@example.com"
    assert auth.loading is False


@pytest.mark.asyncio
async def test_login_without_token_fails_with_server_message(
    auth: AuthStore, api: FakeApi, tokens: MemoryTokenStorage
) -> None:
    api.queue("login", AuthResponse(success=False, message="Credenciais inválidas", token=None, user=None))

    result = await auth.login(CREDS)

    assert result.success is False
    assert result.error == "Credenciais inválidas"
    assert auth.error == "Credenciais inválidas"
    assert auth.is_authenticated is False
    assert auth.user is None
    assert tokens.get() is None
    assert auth.loading is False


@pytest.mark.asyncio
async def test_login_empty_token_is_failure(auth: AuthStore, api: FakeApi) -> None:
    api.queue("login", AuthResponse(success=True, message="", token="", user=User.from_api(user_payload())))

    result = await auth.login(CREDS)

    assert result.success is False
    assert result.error == "Login failed"
    assert auth.user is None


@pytest.mark.asyncio
async def test_login_http_error_never_raises(auth: AuthStore, api: FakeApi) -> None:
    api.queue("login", ApiHttpError(500, "Erro interno"))

    result = await auth.login(CREDS)

    assert result.success is False
    assert auth.error == "Erro interno"
    assert auth.loading is False


@pytest.mark.asyncio
async def test_register_chains_into_login(auth: AuthStore, api: FakeApi) -> None:
    api.queue("register", ok(User.from_api(user_payload())))
    api.queue("login", _auth_ok())

    result = await auth.register(RegisterData(name="Ana", email="ana@example.com", password="secret"))

    assert result.success is True
    assert auth.is_authenticated is True
    (login_args,) = api.called("login")
    assert login_args[0] == LoginCredentials(email="ana@example.com", password="secret")
    assert auth.loading is False


@pytest.mark.asyncio
async def test_register_rejected_does_not_login(auth: AuthStore, api: FakeApi) -> None:
    api.queue("register", rejected("E-mail já cadastrado"))

    result = await auth.register(RegisterData(name="Ana", email="ana@example.com", password="secret"))

    assert result.success is False
    assert result.error == "E-mail já cadastrado"
    assert api.called("login") == []
    assert auth.loading is False


@pytest.mark.asyncio
async def test_fetch_profile_without_token_is_noop(auth: AuthStore, api: FakeApi) -> None:
    auth.error = "previous"

    await auth.fetch_profile()

    assert api.calls == []
    assert auth.user is None
    assert auth.token is None
    assert auth.error == "previous"
    assert auth.loading is False


@pytest.mark.asyncio
async def test_fetch_profile_failure_clears_session(api: FakeApi) -> None:
    tokens = MemoryTokenStorage("stale")
    auth = AuthStore(api, tokens)
    api.queue("get_profile", ApiTransportError("Network error"))

    await auth.fetch_profile()

    assert auth.is_authenticated is False
    assert auth.token is None
    assert tokens.get() is None
    assert auth.loading is False


@pytest.mark.asyncio
async def test_initialize_restores_persisted_session(api: FakeApi) -> None:
    auth = AuthStore(api, MemoryTokenStorage("tok-1"))
    api.queue("get_profile", User.from_api(user_payload()))

    await auth.initialize()

    assert auth.is_authenticated is True
    assert auth.user is not None and auth.user.id == "u1"


@pytest.mark.asyncio
async def test_initialize_without_token_does_nothing(auth: AuthStore, api: FakeApi) -> None:
    await auth.initialize()

    assert api.calls == []
    assert auth.status is AuthStatus.ANONYMOUS


@pytest.mark.asyncio
async def test_update_profile_replaces_user(auth: AuthStore, api: FakeApi) -> None:
    api.queue("login", _auth_ok())
    await auth.login(CREDS)
    api.queue("update_profile", ok(User.from_api(user_payload(name="Ana Maria"))))

    result = await auth.update_profile(ProfileUpdate(name="Ana Maria"))

    assert result.success is True
    assert auth.user is not None and auth.user.name == "Ana Maria"


@pytest.mark.asyncio
async def test_update_profile_failure_keeps_user(auth: AuthStore, api: FakeApi) -> None:
    api.queue("login", _auth_ok())
    await auth.login(CREDS)
    api.queue("update_profile", ApiHttpError(400, ""))

    result = await auth.update_profile(ProfileUpdate(name="X"))

    assert result.success is False
    assert result.error == "Profile update failed"
    assert auth.user is not None and auth.user.name == "Ana"


@pytest.mark.asyncio
async def test_logout_clears_even_when_remote_fails(auth: AuthStore, api: FakeApi, tokens: MemoryTokenStorage) -> None:
    api.queue("login", _auth_ok())
    await auth.login(CREDS)
    api.queue("logout", ApiTransportError("Network error"))

    await auth.logout()

    assert auth.is_authenticated is False
    assert auth.user is None
    assert tokens.get() is None


@pytest.mark.asyncio
async def test_logout_anonymous_skips_remote_call(auth: AuthStore, api: FakeApi) -> None:
    await auth.logout()

    assert api.called("logout") == []
