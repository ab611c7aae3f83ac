from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TimesheetStatus
from .model import WeekTimesheet


class TimesheetRepository(Protocol):
    """The ``timesheets`` collection, one document per (employee, week)."""

    def get_by_id(self, week_id: str) -> Optional[WeekTimesheet]:
        raise NotImplementedError

    def save(self, week: WeekTimesheet) -> None:
        """Insert or fully overwrite the document."""

        raise NotImplementedError

    def list_weeks(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[TimesheetStatus] = None,
        sort_desc: bool = True,
    ) -> Sequence[WeekTimesheet]:
        """Filter by employee and/or status.

        With ``sort_desc`` the result is ordered by week start, newest first,
        and SortedQueryUnavailable is raised when the store cannot order it.
        """

        raise NotImplementedError
