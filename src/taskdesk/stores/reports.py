# src/taskdesk/stores/reports.py

from __future__ import annotations

from ..core.errors import ApiError
from ..core.models import CompletedTasksReport, TeamMemberReport, UserReport
from ..core.ports import ReportApi
from .base import Store


class ReportsStore(Store):
    """Server-computed aggregates. Replaced on each fetch, never edited locally."""

    def __init__(self, api: ReportApi) -> None:
        super().__init__()
        self._api = api
        self.user_report: UserReport | None = None
        self.team_report: list[TeamMemberReport] = []
        self.completed_report: CompletedTasksReport | None = None

    def reset(self) -> None:
        self.user_report = None
        self.team_report = []
        self.completed_report = None
        self.error = None
        self._changed()

    async def fetch_user_report(self) -> UserReport | None:
        with self._action():
            try:
                response = await self._api.get_user_report()
                if response.success:
                    self.user_report = response.data
            except ApiError as e:
                self._fail(e, "Failed to fetch report")
        return self.user_report

    async def fetch_team_report(self, user_ids: list[str]) -> list[TeamMemberReport]:
        with self._action():
            try:
                response = await self._api.get_team_report(user_ids)
                if response.success:
                    self.team_report = list(response.data or [])
            except ApiError as e:
                self._fail(e, "Failed to fetch team report")
        return self.team_report

    async def fetch_completed_in_period(
        self,
        start_date: str,
        end_date: str,
        user_id: str | None = None,
    ) -> CompletedTasksReport | None:
        with self._action():
            try:
                response = await self._api.get_completed_tasks_in_period(start_date, end_date, user_id)
                if response.success:
                    self.completed_report = response.data
            except ApiError as e:
                self._fail(e, "Failed to fetch completed tasks report")
        return self.completed_report
