# src/taskdesk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the stores.

Stores depend on Protocols instead of the concrete HTTP client.
This keeps the transport swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Any, Protocol

from .errors import UnauthenticatedError
from .models import (
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
)

UnauthenticatedListener = Callable[[UnauthenticatedError], None]


class TokenStorage(Protocol):
    """Persisted session token under a single fixed key; absence means anonymous."""

    def get(self) -> str | None: ...
    def set(self, token: str) -> None: ...
    def clear(self) -> None: ...


class Navigator(Protocol):
    """Presentation-side port: where to send the user when the session is gone."""

    def go_to_login(self) -> None: ...


class AuthApi(Protocol):
    async def register(self, data: RegisterData) -> ApiResponse[User]: ...
    async def login(self, credentials: LoginCredentials) -> AuthResponse: ...
    async def logout(self) -> ApiResponse[Any]: ...
    async def get_profile(self) -> User | None: ...
    async def update_profile(self, data: ProfileUpdate) -> ApiResponse[User]: ...


class CategoryApi(Protocol):
    async def get_categories(self) -> ApiResponse[list[Category]]: ...
    async def get_category_by_id(self, category_id: str) -> ApiResponse[Category]: ...
    async def create_category(self, data: CategoryInput) -> ApiResponse[Category]: ...
    async def update_category(self, category_id: str, data: CategoryUpdate) -> ApiResponse[Category]: ...
    async def delete_category(self, category_id: str) -> ApiResponse[Any]: ...


class TaskApi(Protocol):
    async def get_tasks(self) -> ApiResponse[list[Task]]: ...
    async def get_task_by_id(self, task_id: str) -> ApiResponse[Task]: ...
    async def get_tasks_by_category(self, category_id: str) -> ApiResponse[list[Task]]: ...
    async def get_tasks_by_status(self, status: TaskStatus) -> ApiResponse[list[Task]]: ...
    async def get_assigned_tasks(self) -> ApiResponse[list[Task]]: ...
    async def create_task(self, data: CreateTaskData) -> ApiResponse[Task]: ...
    async def update_task(self, task_id: str, data: UpdateTaskData) -> ApiResponse[Task]: ...
    async def delete_task(self, task_id: str) -> ApiResponse[Any]: ...


class CollaborationApi(Protocol):
    async def add_collaborator(self, data: AddCollaboratorData) -> ApiResponse[TaskCollaboration]: ...
    async def get_task_collaborators(self, task_id: str) -> ApiResponse[list[TaskCollaboration]]: ...
    async def get_user_collaborations(self) -> ApiResponse[list[TaskCollaboration]]: ...
    async def remove_collaborator(self, task_id: str, user_id: str) -> ApiResponse[Any]: ...
    async def check_permission(self, task_id: str) -> ApiResponse[CollaborationRole | None]: ...


class ReportApi(Protocol):
    async def get_user_report(self) -> ApiResponse[UserReport]: ...
    async def get_team_report(self, user_ids: list[str]) -> ApiResponse[list[TeamMemberReport]]: ...
    async def get_completed_tasks_in_period(
            self,
            start_date: str,
            end_date: str,
            user_id: str | None = None,
    ) -> ApiResponse[CompletedTasksReport]: ...
