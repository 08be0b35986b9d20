# src/taskdesk/stores/collaborations.py

from __future__ import annotations

import logging

from ..core.errors import ApiError
from ..core.models import AddCollaboratorData, CollaborationRole, TaskCollaboration
from ..core.ports import CollaborationApi
from .base import ActionResult, Store

logger = logging.getLogger(__name__)


class CollaborationsStore(Store):
    """Role grants: the current user's collaborations and per-task collaborator lists."""

    def __init__(self, api: CollaborationApi) -> None:
        super().__init__()
        self._api = api
        self.collaborations: list[TaskCollaboration] = []
        self.task_collaborators: dict[str, list[TaskCollaboration]] = {}
        self.permission: CollaborationRole | None = None

    def reset(self) -> None:
        self.collaborations = []
        self.task_collaborators = {}
        self.permission = None
        self.error = None
        self._changed()

    async def load_collaborations(self) -> None:
        with self._action():
            try:
                response = await self._api.get_user_collaborations()
                if response.success:
                    self.collaborations = list(response.data or [])
            except ApiError as e:
                logger.error("Erro ao carregar colaborações: %s", e)
                self.error = "Erro ao carregar colaborações"

    async def fetch_task_collaborators(self, task_id: str) -> list[TaskCollaboration]:
        with self._action():
            try:
                response = await self._api.get_task_collaborators(task_id)
                if response.success:
                    self.task_collaborators[task_id] = list(response.data or [])
            except ApiError as e:
                self._fail(e, "Failed to fetch collaborators")
        return self.task_collaborators.get(task_id, [])

    async def add_collaborator(self, data: AddCollaboratorData) -> ActionResult[TaskCollaboration]:
        with self._action():
            try:
                response = await self._api.add_collaborator(data)
                if not response.success or response.data is None:
                    raise self._reject(response.message, "Failed to add collaborator")
                self.task_collaborators.setdefault(data.task_id, []).append(response.data)
                return ActionResult(success=True, data=response.data)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Failed to add collaborator"))

    async def remove_collaborator(self, task_id: str, user_id: str) -> ActionResult[None]:
        with self._action():
            try:
                response = await self._api.remove_collaborator(task_id, user_id)
                if not response.success:
                    raise self._reject(response.message, "Failed to remove collaborator")
                if task_id in self.task_collaborators:
                    self.task_collaborators[task_id] = [
                        c for c in self.task_collaborators[task_id] if c.user_id != user_id
                    ]
                self.collaborations = [
                    c for c in self.collaborations if not (c.task_id == task_id and c.user_id == user_id)
                ]
                return ActionResult(success=True)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Failed to remove collaborator"))

    async def check_permission(self, task_id: str) -> CollaborationRole | None:
        """The current user's role on a task; None when there is none or the call failed."""
        try:
            response = await self._api.check_permission(task_id)
        except ApiError as e:
            logger.debug("check_permission(%s) failed: %s", task_id, e)
            self.permission = None
            return None
        self.permission = response.data if response.success else None
        return self.permission
