"""Pure aggregations over weeks and accounts. Nothing here writes."""

from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import UNKNOWN_EMPLOYEE_NAME
from ..core.enums import AccountStatus, Role, TimesheetStatus
from ..timesheets.model import WeekTimesheet
from ..users.model import Account
from ..users.permissions import can_view

_OPEN_STATUSES = (TimesheetStatus.DRAFT, TimesheetStatus.SUBMITTED)


def total_hours(week: WeekTimesheet) -> float:
    return week.total_hours


def total_hours_by_employee(weeks: Iterable[WeekTimesheet]) -> list[dict]:
    """One row per employee, largest total first."""
    summary: dict[str, dict] = {}
    for w in weeks:
        s = summary.get(w.employee_id)
        if not s:
            s = {
                "employee_id": w.employee_id,
                "employee_name": w.employee_name or UNKNOWN_EMPLOYEE_NAME,
                "total_hours": 0.0,
                "weeks": 0,
            }
            summary[w.employee_id] = s
        s["total_hours"] += w.total_hours
        s["weeks"] += 1

    rows = list(summary.values())
    for r in rows:
        r["total_hours"] = round(r["total_hours"], 2)
    rows.sort(key=lambda x: x["total_hours"], reverse=True)
    return rows


def count_by_status(weeks: Iterable[WeekTimesheet]) -> dict[str, int]:
    counts = {s.value: 0 for s in TimesheetStatus}
    for w in weeks:
        counts[w.status.value] += 1
    return counts


def open_count(weeks: Iterable[WeekTimesheet]) -> int:
    return sum(1 for w in weeks if w.status in _OPEN_STATUSES)


def rejected_count(weeks: Iterable[WeekTimesheet]) -> int:
    return sum(1 for w in weeks if w.status == TimesheetStatus.REJECTED)


def user_stats(accounts: Iterable[Account], viewer_role: Optional[Role]) -> dict[str, int]:
    visible = [a for a in accounts if can_view(viewer_role, a.role)]
    stats = {"Total": len(visible)}
    for s in AccountStatus:
        stats[s.value] = sum(1 for a in visible if a.status == s)
    return stats


def dashboard_summary(
    weeks: Iterable[WeekTimesheet],
    accounts: Iterable[Account],
    viewer_role: Optional[Role],
) -> dict:
    weeks = list(weeks)
    return {
        "total_hours": round(sum(w.total_hours for w in weeks), 2),
        "by_status": count_by_status(weeks),
        "open": open_count(weeks),
        "rejected": rejected_count(weeks),
        "by_employee": total_hours_by_employee(weeks),
        "users": user_stats(accounts, viewer_role),
    }
