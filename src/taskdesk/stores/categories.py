# src/taskdesk/stores/categories.py

from __future__ import annotations

import logging

from ..core.errors import ApiError
from ..core.models import Category, CategoryInput, CategoryUpdate
from ..core.ports import CategoryApi
from .base import ActionResult, Store

logger = logging.getLogger(__name__)


class CategoriesStore(Store):
    def __init__(self, api: CategoryApi) -> None:
        super().__init__()
        self._api = api
        self.categories: list[Category] = []

    def reset(self) -> None:
        self.categories = []
        self.error = None
        self._changed()

    def find_local(self, category_id: str) -> Category | None:
        return next((c for c in self.categories if c.id == category_id), None)

    async def fetch_categories(self) -> None:
        with self._action():
            try:
                response = await self._api.get_categories()
                if response.success:
                    self.categories = list(response.data or [])
            except ApiError as e:
                self._fail(e, "Failed to fetch categories")

    async def get_category_by_id(self, category_id: str) -> Category | None:
        """Remote lookup; any failure resolves to None without touching `error`."""
        try:
            response = await self._api.get_category_by_id(category_id)
        except ApiError as e:
            logger.debug("get_category_by_id(%s) failed: %s", category_id, e)
            return None
        return response.data if response.success else None

    async def create_category(self, data: CategoryInput) -> ActionResult[Category]:
        with self._action():
            try:
                response = await self._api.create_category(data)
                if not response.success or response.data is None:
                    raise self._reject(response.message, "Failed to create category")
                self.categories.append(response.data)
                return ActionResult(success=True, data=response.data)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Failed to create category"))

    async def update_category(self, category_id: str, data: CategoryUpdate) -> ActionResult[Category]:
        with self._action():
            try:
                response = await self._api.update_category(category_id, data)
                if not response.success or response.data is None:
                    raise self._reject(response.message, "Failed to update category")
                for i, c in enumerate(self.categories):
                    if c.id == category_id:
                        self.categories[i] = response.data
                        break
                return ActionResult(success=True, data=response.data)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Failed to update category"))

    async def delete_category(self, category_id: str) -> ActionResult[None]:
        with self._action():
            try:
                response = await self._api.delete_category(category_id)
                if not response.success:
                    raise self._reject(response.message, "Failed to delete category")
                self.categories = [c for c in self.categories if c.id != category_id]
                return ActionResult(success=True)
            except ApiError as e:
                return ActionResult(success=False, error=self._fail(e, "Failed to delete category"))
