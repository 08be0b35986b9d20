# src/taskdesk/api/client.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from ..core.errors import ApiError, ApiHttpError, ApiTransportError, UnauthenticatedError
from ..core.models import (
    AddCollaboratorData,
    ApiResponse,
    AuthResponse,
    Category,
    CategoryInput,
    CategoryUpdate,
    CollaborationRole,
    CompletedTasksReport,
    CreateTaskData,
    LoginCredentials,
    ProfileUpdate,
    RegisterData,
    Task,
    TaskCollaboration,
    TaskStatus,
    TeamMemberReport,
    UpdateTaskData,
    User,
    UserReport,
    list_of,
)
from ..core.ports import TokenStorage, UnauthenticatedListener

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "http://localhost:3333"


def make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or ""
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or ""


def _permission(raw: Any) -> CollaborationRole | None:
    value = raw.get("permission") if isinstance(raw, dict) else None
    return CollaborationRole.from_api(value) if value else None


class ApiClient:
    """
    Async REST client for the task API.

    - One coroutine per server operation; request/response bodies are JSON.
    - The bearer token is read from TokenStorage on every request.
    - 401 answers notify the registered listeners, then raise UnauthenticatedError.
      The client never touches the session or the UI itself.
    - No retries: every failure is terminal for that call.
    """

    def __init__(
        self,
        token_storage: TokenStorage,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._tokens = token_storage
        self._listeners: list[UnauthenticatedListener] = []
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout if timeout is not None else make_timeout(5.0, 25.0),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, token_storage: TokenStorage, **kwargs: Any) -> ApiClient:
        return cls(
            token_storage,
            base_url=str(getattr(settings, "api_base_url", DEFAULT_BASE_URL)),
            timeout=make_timeout(
                float(getattr(settings, "api_connect_timeout", 5.0)),
                float(getattr(settings, "api_read_timeout", 25.0)),
            ),
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    def add_unauthenticated_listener(self, listener: UnauthenticatedListener) -> None:
        self._listeners.append(listener)

    def remove_unauthenticated_listener(self, listener: UnauthenticatedListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---- low-level helpers ----

    def _auth_headers(self) -> dict[str, str]:
        token = self._tokens.get()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _notify_unauthenticated(self, err: UnauthenticatedError) -> None:
        for listener in list(self._listeners):
            try:
                listener(err)
            except Exception:
                logger.exception("Unauthenticated listener failed")

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            response = await self._http.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._auth_headers(),
            )
        except httpx.TimeoutException as e:
            raise ApiTransportError(f"Request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            raise ApiTransportError(f"Network error: {e}") from e

        if response.status_code == 401:
            err = UnauthenticatedError(_error_message(response), payload=_safe_json(response))
            logger.info("401 on %s %s, session is no longer valid", method, path)
            self._notify_unauthenticated(err)
            raise err

        if response.is_error:
            message = _error_message(response)
            logger.info("%s %s failed: HTTP %s %s", method, path, response.status_code, message)
            raise ApiHttpError(response.status_code, message, payload=_safe_json(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Invalid JSON in server response") from e

    async def _envelope(
        self,
        method: str,
        path: str,
        convert: Callable[[Any], T] | None = None,
        **kwargs: Any,
    ) -> ApiResponse[T]:
        raw = await self._request(method, path, **kwargs)
        try:
            return ApiResponse.parse(raw, convert)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ApiError("Malformed data in server response", payload=raw) from e

    # ---- auth / users ----

    async def register(self, data: RegisterData) -> ApiResponse[User]:
        return await self._envelope("POST", "/users/register", User.from_api, json=data.to_api())

    async def login(self, credentials: LoginCredentials) -> AuthResponse:
        raw = await self._request("POST", "/users/login", json=credentials.to_api())
        try:
            return AuthResponse.from_api(raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ApiError("Malformed data in server response", payload=raw) from e

    async def logout(self) -> ApiResponse[Any]:
        return await self._envelope("POST", "/users/logout")

    async def get_profile(self) -> User | None:
        raw = await self._request("GET", "/users/profile")
        if not isinstance(raw, dict) or "id" not in raw:
            return None
        return User.from_api(raw)

    async def update_profile(self, data: ProfileUpdate) -> ApiResponse[User]:
        return await self._envelope("PUT", "/users/profile", User.from_api, json=data.to_api())

    async def get_all_users(self) -> ApiResponse[list[User]]:
        return await self._envelope("GET", "/users", list_of(User.from_api))

    # ---- categories ----

    async def get_categories(self) -> ApiResponse[list[Category]]:
        return await self._envelope("GET", "/categories", list_of(Category.from_api))

    async def get_category_by_id(self, category_id: str) -> ApiResponse[Category]:
        return await self._envelope("GET", f"/categories/{category_id}", Category.from_api)

    async def create_category(self, data: CategoryInput) -> ApiResponse[Category]:
        return await self._envelope("POST", "/categories", Category.from_api, json=data.to_api())

    async def update_category(self, category_id: str, data: CategoryUpdate) -> ApiResponse[Category]:
        return await self._envelope(
            "PUT", f"/categories/{category_id}", Category.from_api, json=data.to_api()
        )

    async def delete_category(self, category_id: str) -> ApiResponse[Any]:
        return await self._envelope("DELETE", f"/categories/{category_id}")

    # ---- tasks ----

    async def get_tasks(self) -> ApiResponse[list[Task]]:
        return await self._envelope("GET", "/tasks", list_of(Task.from_api))

    async def get_task_by_id(self, task_id: str) -> ApiResponse[Task]:
        return await self._envelope("GET", f"/tasks/{task_id}", Task.from_api)

    async def get_tasks_by_category(self, category_id: str) -> ApiResponse[list[Task]]:
        return await self._envelope("GET", f"/tasks/category/{category_id}", list_of(Task.from_api))

    async def get_tasks_by_status(self, status: TaskStatus) -> ApiResponse[list[Task]]:
        return await self._envelope("GET", f"/tasks/status/{status}", list_of(Task.from_api))

    async def get_assigned_tasks(self) -> ApiResponse[list[Task]]:
        return await self._envelope("GET", "/tasks/assigned", list_of(Task.from_api))

    async def create_task(self, data: CreateTaskData) -> ApiResponse[Task]:
        return await self._envelope("POST", "/tasks", Task.from_api, json=data.to_api())

    async def update_task(self, task_id: str, data: UpdateTaskData) -> ApiResponse[Task]:
        return await self._envelope("PUT", f"/tasks/{task_id}", Task.from_api, json=data.to_api())

    async def delete_task(self, task_id: str) -> ApiResponse[Any]:
        return await self._envelope("DELETE", f"/tasks/{task_id}")

    # ---- collaborations ----

    async def add_collaborator(self, data: AddCollaboratorData) -> ApiResponse[TaskCollaboration]:
        return await self._envelope(
            "POST", "/collaborations", TaskCollaboration.from_api, json=data.to_api()
        )

    async def get_task_collaborators(self, task_id: str) -> ApiResponse[list[TaskCollaboration]]:
        return await self._envelope(
            "GET", f"/collaborations/task/{task_id}", list_of(TaskCollaboration.from_api)
        )

    async def get_user_collaborations(self) -> ApiResponse[list[TaskCollaboration]]:
        return await self._envelope("GET", "/collaborations/user", list_of(TaskCollaboration.from_api))

    async def remove_collaborator(self, task_id: str, user_id: str) -> ApiResponse[Any]:
        return await self._envelope("DELETE", f"/collaborations/task/{task_id}/user/{user_id}")

    async def check_permission(self, task_id: str) -> ApiResponse[CollaborationRole | None]:
        return await self._envelope("GET", f"/collaborations/permission/{task_id}", _permission)

    # ---- reports ----

    async def get_user_report(self) -> ApiResponse[UserReport]:
        return await self._envelope("GET", "/reports/user", UserReport.from_api)

    async def get_team_report(self, user_ids: list[str]) -> ApiResponse[list[TeamMemberReport]]:
        return await self._envelope(
            "POST", "/reports/team", list_of(TeamMemberReport.from_api), json={"userIds": list(user_ids)}
        )

    async def get_completed_tasks_in_period(
        self,
        start_date: str,
        end_date: str,
        user_id: str | None = None,
    ) -> ApiResponse[CompletedTasksReport]:
        params = {"startDate": start_date, "endDate": end_date}
        if user_id:
            params["userId"] = user_id
        return await self._envelope(
            "GET", "/reports/completed-tasks", CompletedTasksReport.from_api, params=params
        )


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
