from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import PermissionDenied
from ..timesheets.service import TimesheetService
from ..users.repository import UserRepository
from . import aggregation
from .csv_export import (
    default_export_filename,
    render_csv,
    sanitize_filename,
    single_week_filename,
    with_bom,
)


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class ReportService:
    def __init__(self, timesheets: TimesheetService, users: UserRepository):
        self._timesheets = timesheets
        self._users = users

    def dashboard(self, *, current_role: Optional[Role], current_user_id: str) -> dict:
        weeks = self._timesheets.visible_weeks(current_role=current_role, current_user_id=current_user_id)
        accounts = self._users.list_all() if current_role and current_role.is_admin else []
        summary = aggregation.dashboard_summary(weeks, accounts, current_role)
        if current_role and current_role.is_reviewer:
            summary["pending_review"] = len(self._timesheets.pending_for_review())
        return summary

    def export_employee_csv(
        self,
        *,
        current_role: Optional[Role],
        current_user_id: str,
        employee_id: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> CsvExport:
        employee_id = employee_id or current_user_id
        if employee_id != current_user_id and not (current_role and current_role.is_reviewer):
            raise PermissionDenied("You can only export your own timesheets")

        weeks = self._timesheets.list_weeks_for_employee(employee_id)
        if filename:
            filename = sanitize_filename(filename)
        else:
            name = weeks[0].employee_name if weeks else None
            if name is None:
                account = self._users.get_by_id(employee_id)
                name = account.name if account else None
            filename = default_export_filename(name, len(weeks))
        return CsvExport(filename=filename, content=with_bom(render_csv(weeks)))

    def export_all_csv(self, *, current_role: Optional[Role], filename: Optional[str] = None) -> CsvExport:
        if not (current_role and current_role.is_reviewer):
            raise PermissionDenied("Only managers can export all timesheets")
        weeks = self._timesheets.list_all_weeks()
        filename = sanitize_filename(filename or f"timesheets_all_{len(weeks)}weeks")
        return CsvExport(filename=filename, content=with_bom(render_csv(weeks)))

    def export_week_csv(
        self,
        *,
        current_role: Optional[Role],
        current_user_id: str,
        week_id: str,
        filename: Optional[str] = None,
    ) -> CsvExport:
        week = self._timesheets.get_week(
            current_role=current_role,
            current_user_id=current_user_id,
            week_id=week_id,
        )
        if filename:
            filename = sanitize_filename(filename)
        else:
            filename = single_week_filename(week.employee_name)
        return CsvExport(filename=filename, content=with_bom(render_csv([week])))
