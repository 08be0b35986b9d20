# src/taskdesk/stores/tasks.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.errors import ApiError
from ..core.models import CreateTaskData, Task, TaskStatus, UpdateTaskData
from ..core.ports import TaskApi
from ..helpers.dates import is_past
from .base import ActionResult, Store

logger = logging.getLogger(__name__)


class TasksStore(Store):
    """
    All tasks visible to the user plus the "assigned to me" subset.

    Mutations patch the lists by id after the server confirmed them.
    Two in-flight updates of the same task are not coordinated: the last
    response to arrive wins.
    """

    def __init__(self, api: TaskApi) -> None:
        super().__init__()
        self._api = api
        self.tasks: list[Task] = []
        self.assigned_tasks: list[Task] = []

    def reset(self) -> None:
        self.tasks = []
        self.assigned_tasks = []
        self.error = None
        self._changed()

    # ---- derived views ----

    @property
    def tasks_by_status(self) -> dict[TaskStatus, list[Task]]:
        grouped: dict[TaskStatus, list[Task]] = {status: [] for status in TaskStatus}
        for task in self.tasks:
            grouped[task.status].append(task)
        return grouped

    @property
    def overdue_tasks(self) -> list[Task]:
        return self.overdue_at(datetime.now().astimezone())

    def overdue_at(self, now: datetime) -> list[Task]:
        return [
            t
            for t in self.tasks
            if t.due_date and t.status != TaskStatus.COMPLETED and is_past(t.due_date, now)
        ]

    # ---- reads ----

    async def fetch_tasks(self) -> None:
        with self._action():
            try:
                response = await self._api.get_tasks()
                if response.success:
                    self.tasks = list(response.data or [])
            except ApiError as e:
                self._fail(e, "Failed to fetch tasks")

    async def fetch_assigned_tasks(self) -> None:
        with self._action():
            try:
                response = await self._api.get_assigned_tasks()
                if response.success:
                    self.assigned_tasks = list(response.data or [])
            except ApiError as e:
                self._fail(e, "Failed to fetch assigned tasks")

    async def get_task_by_id(self, task_id: str) -> Task | None:
        try:
            response = await self._api.get_task_by_id(task_id)
        except ApiError as e:
            self._fail(e, "Failed to fetch task")
            return None
        if response.success and response.data is not None:
            return response.data
        return None

    async def get_tasks_by_category(self, category_id: str) -> list[Task]:
        with self._action():
            try:
                response = await self._api.get_tasks_by_category(category_id)
                return list(response.data or []) if response.success else []
            except ApiError as e:
                self._fail(e, "Failed to fetch tasks by category")
                return []

    async def get_tasks_by_status(self, status: TaskStatus) -> list[Task]:
        with self._action():
            try:
                response = await self._api.get_tasks_by_status(status)
                return list(response.data or []) if response.success else []
            except ApiError as e:
                self._fail(e, "Failed to fetch tasks by status")
                return []

    # ---- mutations ----

    async def _joined(self, task_id: str, fallback: Task | None = None) -> Task | None:
        """Fetch the fully joined task; fall back to the mutation payload (if any) on failure."""
        try:
            response = await self._api.get_task_by_id(task_id)
        except ApiError as e:
            logger.info("Refetch of task %s failed (%s), using mutation payload", task_id, e)
            return fallback
        if response.success and response.data is not None:
            return response.data
        return fallback

    async def create_task(self, data: CreateTaskData) -> ActionResult[Task]:
        with self._action():
            try:
                response = await self._api.create_task(data)
                if not response.success or response.data is None:
                    raise self._reject(response.message, "Failed to create task")
                task = await self._joined(response.data.id, response.data) or response.data
                self.tasks.append(task)
                return ActionResult(success=True, data=task)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Failed to create task"))

    async def update_task(self, task_id: str, data: UpdateTaskData) -> ActionResult[Task]:
        with self._action():
            try:
                response = await self._api.update_task(task_id, data)
                if not response.success:
                    raise self._reject(response.message, "Failed to update task")
                task = await self._joined(task_id, response.data)
                if task is not None:
                    _replace_by_id(self.tasks, task_id, task)
                    _replace_by_id(self.assigned_tasks, task_id, task)
                return ActionResult(success=True, data=task)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Failed to update task"))

    async def update_task_status(self, task_id: str, status: TaskStatus) -> ActionResult[Task]:
        return await self.update_task(task_id, UpdateTaskData(status=status))

    async def delete_task(self, task_id: str) -> ActionResult[None]:
        with self._action():
            try:
                response = await self._api.delete_task(task_id)
                if not response.success:
                    raise self._reject(response.message, "Failed to delete task")
                self.tasks = [t for t in self.tasks if t.id != task_id]
                self.assigned_tasks = [t for t in self.assigned_tasks if t.id != task_id]
                return ActionResult(success=True)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Failed to delete task"))


def _replace_by_id(items: list[Task], task_id: str, task: Task) -> None:
    for i, t in enumerate(items):
        if t.id == task_id:
            items[i] = task
            return
