from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import format_display_date, parse_display_date
from ..core.enums import DayId, ShiftType, TimesheetStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="seconds") if value else None


@dataclass(frozen=True)
class DayEntry:
    """One day slot of a week. A save replaces the whole entry."""

    day_id: DayId
    label: str
    hours: float
    job_no: str = ""
    location: str = ""
    shift_type: Optional[ShiftType] = None
    start_time: Optional[str] = None
    finish_time: Optional[str] = None
    lunch_taken: str = "No"
    living_away: str = "No"
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.day_id.value,
            "label": self.label,
            "hours": self.hours,
            "job_no": self.job_no,
            "location": self.location,
            "shift_type": self.shift_type.value if self.shift_type else None,
            "start_time": self.start_time,
            "finish_time": self.finish_time,
            "lunch_taken": self.lunch_taken,
            "living_away": self.living_away,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DayEntry":
        """Load a stored entry. Older rows may only carry id/label/hours."""
        shift = data.get("shift_type")
        return cls(
            day_id=DayId(data["id"]),
            label=data.get("label") or "",
            hours=float(data.get("hours") or 0),
            job_no=data.get("job_no") or "",
            location=data.get("location") or "",
            shift_type=ShiftType(shift) if shift else None,
            start_time=data.get("start_time"),
            finish_time=data.get("finish_time"),
            lunch_taken=data.get("lunch_taken") or "No",
            living_away=data.get("living_away") or "No",
            description=data.get("description") or "",
        )


@dataclass(frozen=True)
class WeekTimesheet:
    week_id: str
    label: str
    week_start: str  # DD/MM/YYYY (Monday)
    status: TimesheetStatus
    employee_id: str
    employee_name: Optional[str]
    days: tuple[DayEntry, ...] = field(default_factory=tuple)
    rejection_comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None

    @property
    def total_hours(self) -> float:
        return round(sum(d.hours for d in self.days), 2)

    @property
    def has_hours(self) -> bool:
        return any(d.hours > 0 for d in self.days)

    @property
    def week_end(self) -> str:
        """Closing Sunday as DD/MM/YYYY; empty when week_start is malformed."""
        try:
            monday = parse_display_date(self.week_start)
        except ValueError:
            return ""
        return format_display_date(monday + timedelta(days=6))

    def day(self, day_id: DayId) -> Optional[DayEntry]:
        for d in self.days:
            if d.day_id == day_id:
                return d
        return None

    def with_day(self, entry: DayEntry) -> "WeekTimesheet":
        """Replace or insert the slot, keeping mon..sun order."""
        others = [d for d in self.days if d.day_id != entry.day_id]
        days = sorted([*others, entry], key=lambda d: d.day_id.index)
        return replace(self, days=tuple(days))

    def to_dict(self) -> dict:
        return {
            "id": self.week_id,
            "label": self.label,
            "week_start": self.week_start,
            "week_end": self.week_end,
            "status": self.status.value,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "days": [d.to_dict() for d in self.days],
            "total_hours": self.total_hours,
            "rejection_comment": self.rejection_comment,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "submitted_at": _iso(self.submitted_at),
            "reviewed_at": _iso(self.reviewed_at),
        }
