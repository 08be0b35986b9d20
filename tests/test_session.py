# tests/test_session.py

from __future__ import annotations

import pytest

from taskdesk.cli.bootstrap import create_app
from taskdesk.core.models import LoginCredentials
from taskdesk.storage.token_store import MemoryTokenStorage

from .fakes import ApiRoutes, FakeNavigator, task_payload, user_payload


def _envelope(data=None, message: str = "") -> dict:
    return {"success": True, "message": message, "data": data}


@pytest.mark.asyncio
async def test_restored_session_loads_profile(settings, navigator: FakeNavigator) -> None:
    routes = ApiRoutes()
    routes.add("GET", "/users/profile", user_payload())
    app = create_app(
        settings=settings,
        navigator=navigator,
        token_storage=MemoryTokenStorage("persisted"),
        transport=routes.transport(),
    )

    await app.session.start()

    assert app.auth.is_authenticated is True
    assert app.auth.user is not None and app.auth.user.id == "u1"
    assert routes.requests[0].headers["authorization"] == "Bearer persisted"
    assert navigator.login_redirects == 0
    await app.session.shutdown()


@pytest.mark.asyncio
async def test_expired_token_clears_session_and_redirects(settings, navigator: FakeNavigator) -> None:
    routes = ApiRoutes()
    routes.add("GET", "/users/profile", {"message": "Token expirado"}, status=401)
    tokens = MemoryTokenStorage("stale")
    app = create_app(settings=settings, navigator=navigator, token_storage=tokens, transport=routes.transport())

    await app.session.start()

    assert tokens.get() is None
    assert app.auth.token is None
    assert app.auth.user is None
    assert app.auth.is_authenticated is False
    assert navigator.login_redirects == 1
    await app.session.shutdown()


@pytest.mark.asyncio
async def test_401_from_any_store_redirects_to_login(settings, navigator: FakeNavigator) -> None:
    routes = ApiRoutes()
    routes.add("GET", "/tasks", {"message": "Não autorizado"}, status=401)
    tokens = MemoryTokenStorage("stale")
    app = create_app(settings=settings, navigator=navigator, token_storage=tokens, transport=routes.transport())

    await app.tasks.fetch_tasks()

    assert app.tasks.error == "Não autorizado"
    assert app.tasks.loading is False
    assert tokens.get() is None
    assert navigator.history == ["/login"]
    await app.session.shutdown()


@pytest.mark.asyncio
async def test_401_wipes_data_loaded_by_other_stores(settings, navigator: FakeNavigator) -> None:
    routes = ApiRoutes()
    routes.add("GET", "/tasks", _envelope([task_payload("secret")]))
    routes.add("GET", "/categories", {"message": "Não autorizado"}, status=401)
    app = create_app(
        settings=settings,
        navigator=navigator,
        token_storage=MemoryTokenStorage("stale"),
        transport=routes.transport(),
    )

    await app.tasks.fetch_tasks()
    assert [t.id for t in app.tasks.tasks] == ["secret"]

    await app.categories.fetch_categories()

    assert app.tasks.tasks == []
    assert app.tasks.assigned_tasks == []
    assert app.categories.categories == []
    assert app.categories.error == "Não autorizado"
    assert app.auth.is_authenticated is False
    assert navigator.login_redirects == 1
    await app.session.shutdown()


@pytest.mark.asyncio
async def test_logout_resets_every_store(settings, navigator: FakeNavigator) -> None:
    routes = ApiRoutes()
    routes.add("POST", "/users/login", {"success": True, "message": "", "token": "fresh", "user": user_payload()})
    routes.add("GET", "/tasks", _envelope([task_payload("t1"), task_payload("t2")]))
    routes.add("POST", "/users/logout", _envelope())
    tokens = MemoryTokenStorage()
    app = create_app(settings=settings, navigator=navigator, token_storage=tokens, transport=routes.transport())

    result = await app.auth.login(LoginCredentials(email="ana@example.com", password="secret"))
    assert result.success is True
    assert tokens.get() == "fresh"

    await app.tasks.fetch_tasks()
    assert [t.id for t in app.tasks.tasks] == ["t1", "t2"]

    await app.session.logout()

    assert tokens.get() is None
    assert app.auth.user is None
    assert app.tasks.tasks == []
    assert routes.paths()[-1] == "POST /users/logout"
    assert navigator.login_redirects == 0
    await app.session.shutdown()


@pytest.mark.asyncio
async def test_shutdown_is_idempotent(settings) -> None:
    app = create_app(settings=settings, token_storage=MemoryTokenStorage(), transport=ApiRoutes().transport())

    await app.session.shutdown()
    await app.session.shutdown()
