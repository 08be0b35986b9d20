# src/taskdesk/core/models.py

"""
Domain DTOs exchanged with the task API.

The server speaks camelCase JSON; every DTO has a `from_api` constructor that
reads that shape and request inputs have a `to_api` serializer. Stores hold the
only writable copies; everything here is treated as a value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TaskStatus(StrEnum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @classmethod
    def from_api(cls, raw: Any) -> TaskStatus:
        try:
            return cls(raw)
        except ValueError:
            logger.warning("Unknown task status %r from server, using TODO", raw)
            return cls.TODO


class TaskPriority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def from_api(cls, raw: Any) -> TaskPriority:
        try:
            return cls(raw)
        except ValueError:
            logger.warning("Unknown task priority %r from server, using MEDIUM", raw)
            return cls.MEDIUM


class CollaborationRole(StrEnum):
    OWNER = "OWNER"
    COLLABORATOR = "COLLABORATOR"
    VIEWER = "VIEWER"

    @classmethod
    def from_api(cls, raw: Any) -> CollaborationRole:
        try:
            return cls(raw)
        except ValueError:
            logger.warning("Unknown collaboration role %r from server, using VIEWER", raw)
            return cls.VIEWER


def _opt_str(raw: Any) -> str | None:
    return None if raw is None else str(raw)


def _int(raw: Any) -> int:
    try:
        return int(raw or 0)
    except (TypeError, ValueError):
        return 0


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


# ---- entities ----


@dataclass(slots=True)
class User:
    id: str
    name: str
    email: str
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> User:
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name") or ""),
            email=str(raw.get("email") or ""),
            created_at=_opt_str(raw.get("createdAt")),
            updated_at=_opt_str(raw.get("updatedAt")),
        )


@dataclass(slots=True)
class Category:
    id: str
    name: str
    description: str | None
    color: str | None
    user_id: str
    created_at: str
    updated_at: str

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Category:
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name") or ""),
            description=_opt_str(raw.get("description")),
            color=_opt_str(raw.get("color")),
            user_id=str(raw.get("userId") or ""),
            created_at=str(raw.get("createdAt") or ""),
            updated_at=str(raw.get("updatedAt") or ""),
        )


@dataclass(slots=True)
class TaskCollaboration:
    id: str
    task_id: str
    user_id: str
    role: CollaborationRole
    created_at: str
    user: User | None = None
    task: Task | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> TaskCollaboration:
        user = raw.get("user")
        task = raw.get("task")
        return cls(
            id=str(raw["id"]),
            task_id=str(raw.get("taskId") or ""),
            user_id=str(raw.get("userId") or ""),
            role=CollaborationRole.from_api(raw.get("role")),
            created_at=str(raw.get("createdAt") or ""),
            user=User.from_api(user) if isinstance(user, dict) else None,
            task=Task.from_api(task) if isinstance(task, dict) else None,
        )


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: str | None
    category_id: str | None
    assigned_user_id: str
    created_by_id: str
    created_at: str
    updated_at: str

    # Relations are only populated on joined (fetch-by-id) representations.
    category: Category | None = None
    assigned_user: User | None = None
    created_by: User | None = None
    collaborations: list[TaskCollaboration] | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Task:
        task_id = str(raw["id"])

        category = raw.get("category")
        assigned_user = raw.get("assignedUser")
        created_by = raw.get("createdBy")

        collaborations: list[TaskCollaboration] | None = None
        raw_collabs = raw.get("collaborations")
        if isinstance(raw_collabs, list):
            collaborations = []
            for item in raw_collabs:
                if not isinstance(item, dict):
                    continue
                collab = TaskCollaboration.from_api(item)
                if collab.task_id and collab.task_id != task_id:
                    logger.warning(
                        "Dropping collaboration %s: belongs to task %s, not %s",
                        collab.id,
                        collab.task_id,
                        task_id,
                    )
                    continue
                collaborations.append(collab)

        return cls(
            id=task_id,
            title=str(raw.get("title") or ""),
            description=_opt_str(raw.get("description")),
            status=TaskStatus.from_api(raw.get("status")),
            priority=TaskPriority.from_api(raw.get("priority")),
            due_date=_opt_str(raw.get("dueDate")),
            category_id=_opt_str(raw.get("categoryId")),
            assigned_user_id=str(raw.get("assignedUserId") or ""),
            created_by_id=str(raw.get("createdById") or ""),
            created_at=str(raw.get("createdAt") or ""),
            updated_at=str(raw.get("updatedAt") or ""),
            category=Category.from_api(category) if isinstance(category, dict) else None,
            assigned_user=User.from_api(assigned_user) if isinstance(assigned_user, dict) else None,
            created_by=User.from_api(created_by) if isinstance(created_by, dict) else None,
            collaborations=collaborations,
        )


# ---- reports (read-only) ----


@dataclass(slots=True, frozen=True)
class CategoryCount:
    category_id: str
    category_name: str
    count: int


@dataclass(slots=True, frozen=True)
class UserReport:
    total_tasks: int
    tasks_by_status: dict[TaskStatus, int]
    tasks_by_category: list[CategoryCount]
    overdue_tasks: int
    completed_this_month: int

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> UserReport:
        by_status = raw.get("tasksByStatus")
        if not isinstance(by_status, dict):
            by_status = {}
        return cls(
            total_tasks=_int(raw.get("totalTasks")),
            tasks_by_status={s: _int(by_status.get(s.value)) for s in TaskStatus},
            tasks_by_category=[
                CategoryCount(
                    category_id=str(c.get("categoryId") or ""),
                    category_name=str(c.get("categoryName") or ""),
                    count=_int(c.get("count")),
                )
                for c in raw.get("tasksByCategory") or []
                if isinstance(c, dict)
            ],
            overdue_tasks=_int(raw.get("overdueTasks")),
            completed_this_month=_int(raw.get("completedThisMonth")),
        )


@dataclass(slots=True, frozen=True)
class TeamMemberReport:
    user_id: str
    user_name: str
    assigned_tasks: int
    completed_tasks: int
    overdue_tasks: int

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> TeamMemberReport:
        return cls(
            user_id=str(raw.get("userId") or ""),
            user_name=str(raw.get("userName") or ""),
            assigned_tasks=_int(raw.get("assignedTasks")),
            completed_tasks=_int(raw.get("completedTasks")),
            overdue_tasks=_int(raw.get("overdueTasks")),
        )


@dataclass(slots=True, frozen=True)
class CompletedTasksReport:
    user_id: str
    start_date: str
    end_date: str
    completed_tasks: int

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> CompletedTasksReport:
        return cls(
            user_id=str(raw.get("userId") or ""),
            start_date=str(raw.get("startDate") or ""),
            end_date=str(raw.get("endDate") or ""),
            completed_tasks=_int(raw.get("completedTasks")),
        )


# ---- envelopes ----


@dataclass(slots=True)
class ApiResponse(Generic[T]):
    """The {success, message, data} wrapper shared by list/object endpoints."""

    success: bool
    message: str
    data: T | None = None

    @classmethod
    def parse(cls, raw: Any, convert: Callable[[Any], T] | None = None) -> ApiResponse[T]:
        if not isinstance(raw, dict):
            return cls(success=False, message="Unexpected response from server", data=None)
        success = bool(raw.get("success"))
        data = raw.get("data")
        if success and data is not None and convert is not None:
            data = convert(data)
        return cls(success=success, message=str(raw.get("message") or ""), data=data)


@dataclass(slots=True)
class AuthResponse:
    success: bool
    message: str
    token: str | None
    user: User | None

    @classmethod
    def from_api(cls, raw: Any) -> AuthResponse:
        if not isinstance(raw, dict):
            return cls(success=False, message="", token=None, user=None)
        user = raw.get("user")
        return cls(
            success=bool(raw.get("success")),
            message=str(raw.get("message") or ""),
            token=_opt_str(raw.get("token")) or None,
            user=User.from_api(user) if isinstance(user, dict) else None,
        )


def list_of(convert: Callable[[dict[str, Any]], T]) -> Callable[[Any], list[T]]:
    """Build a converter for a JSON array of objects."""

    def _convert(raw: Any) -> list[T]:
        return [convert(item) for item in raw or [] if isinstance(item, dict)]

    return _convert


# ---- request inputs ----


@dataclass(slots=True)
class LoginCredentials:
    email: str
    password: str

    def to_api(self) -> dict[str, Any]:
        return {"email": self.email, "password": self.password}


@dataclass(slots=True)
class RegisterData:
    name: str
    email: str
    password: str

    def to_api(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email, "password": self.password}


@dataclass(slots=True)
class ProfileUpdate:
    name: str | None = None
    email: str | None = None
    password: str | None = None

    def to_api(self) -> dict[str, Any]:
        return _drop_none({"name": self.name, "email": self.email, "password": self.password})


@dataclass(slots=True)
class CategoryInput:
    name: str
    description: str | None = None
    color: str | None = None

    def to_api(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "color": self.color}


@dataclass(slots=True)
class CategoryUpdate:
    name: str | None = None
    description: str | None = None
    color: str | None = None

    def to_api(self) -> dict[str, Any]:
        return _drop_none({"name": self.name, "description": self.description, "color": self.color})


@dataclass(slots=True)
class CreateTaskData:
    title: str
    priority: TaskPriority
    assigned_user_id: str
    description: str | None = None
    due_date: str | None = None
    category_id: str | None = None

    def to_api(self) -> dict[str, Any]:
        return _drop_none(
            {
                "title": self.title,
                "description": self.description,
                "priority": self.priority.value,
                "dueDate": self.due_date,
                "categoryId": self.category_id,
                "assignedUserId": self.assigned_user_id,
            }
        )


@dataclass(slots=True)
class UpdateTaskData:
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: str | None = None
    category_id: str | None = None
    assigned_user_id: str | None = None

    def to_api(self) -> dict[str, Any]:
        return _drop_none(
            {
                "title": self.title,
                "description": self.description,
                "status": self.status.value if self.status is not None else None,
                "priority": self.priority.value if self.priority is not None else None,
                "dueDate": self.due_date,
                "categoryId": self.category_id,
                "assignedUserId": self.assigned_user_id,
            }
        )


@dataclass(slots=True)
class AddCollaboratorData:
    task_id: str
    user_id: str
    role: CollaborationRole = CollaborationRole.COLLABORATOR

    def to_api(self) -> dict[str, Any]:
        return {"taskId": self.task_id, "userId": self.user_id, "role": self.role.value}
