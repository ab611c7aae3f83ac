from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import (
    day_label,
    display_date_sort_key,
    format_display_date,
    now_local,
    parse_display_date,
    parse_iso_date,
    week_bounds,
    week_id_for,
    week_label,
)
from ..common.validators import optional_time
from ..core.constants import UNKNOWN_EMPLOYEE_NAME
from ..core.enums import DayId, Role, ShiftType, TimesheetStatus
from ..core.exceptions import (
    CommentRequired,
    NoHoursEntered,
    NotFound,
    PermissionDenied,
    SortedQueryUnavailable,
    StateConflict,
    ValidationError,
)
from ..users.repository import UserRepository
from .hours import resolve_hours
from .model import DayEntry, WeekTimesheet
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)

_REVIEW_DECISIONS = (TimesheetStatus.APPROVED, TimesheetStatus.REJECTED)


def _yes_no(value, field_name: str) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    v = (value or "No").strip().capitalize()
    if v not in ("Yes", "No"):
        raise ValidationError(f"{field_name} must be Yes or No")
    return v


def split_week_id(week_id: str) -> tuple[date, str]:
    """``YYYY-MM-DD_<employee_id>`` -> (closing Sunday, employee id)."""
    sunday_iso, sep, employee_id = (week_id or "").partition("_")
    if not sep or not employee_id:
        raise ValidationError("Invalid week id")
    try:
        sunday = parse_iso_date(sunday_iso)
    except ValueError:
        raise ValidationError("Invalid week id")
    if sunday.weekday() != 6:
        raise ValidationError("Week id must end on a Sunday")
    return sunday, employee_id


def build_day_entry(data: dict, *, monday: Optional[date] = None) -> DayEntry:
    """Validate a day payload from the editor into a DayEntry.

    Hours come from the start/finish range when both are given.
    """
    try:
        day_id = DayId(str(data.get("id") or data.get("day_id") or "").strip().lower())
    except ValueError:
        raise ValidationError("Day must be one of: " + ", ".join(d.value for d in DayId))

    start_time = optional_time(data.get("start_time"), "Start time")
    finish_time = optional_time(data.get("finish_time"), "Finish time")
    lunch_taken = _yes_no(data.get("lunch_taken"), "Lunch taken")

    raw_hours = data.get("hours")
    try:
        explicit = float(raw_hours) if raw_hours not in (None, "") else None
    except (TypeError, ValueError):
        raise ValidationError("Hours must be a number")
    if explicit is not None and not math.isfinite(explicit):
        raise ValidationError("Hours must be a number")
    if explicit is not None and explicit < 0:
        raise ValidationError("Hours cannot be negative")

    shift = data.get("shift_type")
    try:
        shift_type = ShiftType(shift) if shift else None
    except ValueError:
        raise ValidationError("Shift type must be one of: " + ", ".join(s.value for s in ShiftType))

    label = (data.get("label") or "").strip()
    if not label and monday is not None:
        label = day_label(monday + timedelta(days=day_id.index))

    return DayEntry(
        day_id=day_id,
        label=label,
        hours=resolve_hours(
            start_time=start_time,
            finish_time=finish_time,
            lunch_taken=lunch_taken == "Yes",
            explicit_hours=explicit,
        ),
        job_no=(data.get("job_no") or "").strip(),
        location=(data.get("location") or "").strip(),
        shift_type=shift_type,
        start_time=start_time,
        finish_time=finish_time,
        lunch_taken=lunch_taken,
        living_away=_yes_no(data.get("living_away"), "Living away"),
        description=(data.get("description") or "").strip(),
    )


class TimesheetService:
    """Use case: weekly timesheet lifecycle.

    Draft -> Submitted -> Approved | Rejected, plus the reviewer-only
    Draft -> Approved correction. Each command is one read then one write of
    a single week; concurrent writers race and the last write wins.
    """

    def __init__(self, timesheets: TimesheetRepository, users: UserRepository):
        self._timesheets = timesheets
        self._users = users

    def _employee_name(self, employee_id: str) -> str:
        account = self._users.get_by_id(employee_id)
        return account.name if account and account.name else UNKNOWN_EMPLOYEE_NAME

    def _require(self, week_id: str) -> WeekTimesheet:
        week = self._timesheets.get_by_id(week_id)
        if week is None:
            raise NotFound("Timesheet not found")
        return week

    # ---------- commands ----------

    def save_day_draft(
        self,
        *,
        current_role: Optional[Role],
        current_user_id: str,
        week_id: str,
        day: dict | DayEntry,
        week_label_text: Optional[str] = None,
        week_start: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> WeekTimesheet:
        target_id = employee_id or current_user_id
        correcting = target_id != current_user_id
        if correcting and not (current_role and current_role.is_reviewer):
            raise PermissionDenied("You can only edit your own timesheet")

        sunday, week_owner = split_week_id(week_id)
        if week_owner != target_id:
            raise PermissionDenied("This week belongs to another employee")
        monday = sunday - timedelta(days=6)

        if week_start:
            try:
                claimed = parse_display_date(week_start)
            except ValueError:
                raise ValidationError("Week start must be DD/MM/YYYY")
            if claimed != monday:
                raise ValidationError(f"Week start must be {format_display_date(monday)} for this week")
        week_start = format_display_date(monday)

        entry = day if isinstance(day, DayEntry) else build_day_entry(day, monday=monday)
        if not math.isfinite(entry.hours) or entry.hours <= 0:
            raise ValidationError("Please enter hours greater than 0")

        existing = self._timesheets.get_by_id(week_id)
        if existing is not None:
            if existing.employee_id != target_id:
                raise PermissionDenied("This week belongs to another employee")
            if not correcting and existing.status != TimesheetStatus.DRAFT:
                raise StateConflict(f"Week is {existing.status.value} and can no longer be edited")

        now = now_local()
        if existing is None:
            existing = WeekTimesheet(
                week_id=week_id,
                label=(week_label_text or "").strip() or week_label(sunday),
                week_start=week_start,
                status=TimesheetStatus.DRAFT,
                employee_id=target_id,
                employee_name=self._employee_name(target_id),
                created_at=now,
            )
        week = replace(existing.with_day(entry), updated_at=now)
        self._timesheets.save(week)

        logger.info(
            "day saved week=%s day=%s hours=%s by=%s%s",
            week_id,
            entry.day_id.value,
            entry.hours,
            current_user_id,
            " (correction)" if correcting else "",
        )
        return week

    def submit(self, *, current_user_id: str, week_id: str) -> WeekTimesheet:
        week = self._require(week_id)
        if week.employee_id != current_user_id:
            raise PermissionDenied("Only the owner can submit this timesheet")
        if week.status != TimesheetStatus.DRAFT:
            raise StateConflict(f"Only Draft weeks can be submitted (current: {week.status.value})")
        if not week.has_hours:
            raise NoHoursEntered("Please enter hours for at least one day before submitting")

        now = now_local()
        week = replace(week, status=TimesheetStatus.SUBMITTED, submitted_at=now, updated_at=now)
        self._timesheets.save(week)
        logger.info("week submitted week=%s", week_id)
        return week

    def review(
        self,
        *,
        current_role: Optional[Role],
        week_id: str,
        decision,
        comment: Optional[str] = None,
    ) -> WeekTimesheet:
        if not (current_role and current_role.is_reviewer):
            raise PermissionDenied("Only managers can review timesheets")
        try:
            decision = TimesheetStatus(decision)
        except ValueError:
            raise ValidationError("Decision must be Approved or Rejected")
        if decision not in _REVIEW_DECISIONS:
            raise ValidationError("Decision must be Approved or Rejected")

        week = self._require(week_id)
        if week.status != TimesheetStatus.SUBMITTED:
            raise StateConflict(f"Only Submitted weeks can be reviewed (current: {week.status.value})")

        comment = (comment or "").strip()
        if decision == TimesheetStatus.REJECTED and not comment:
            raise CommentRequired("Please add a comment explaining the rejection")

        now = now_local()
        week = replace(
            week,
            status=decision,
            rejection_comment=comment if decision == TimesheetStatus.REJECTED else None,
            reviewed_at=now,
            updated_at=now,
        )
        self._timesheets.save(week)
        logger.info("week reviewed week=%s decision=%s", week_id, decision.value)
        return week

    def force_approve(self, *, current_role: Optional[Role], week_id: str) -> WeekTimesheet:
        """Approve a week the employee never submitted (manager correction)."""
        if not (current_role and current_role.is_reviewer):
            raise PermissionDenied("Only managers can approve timesheets")
        week = self._require(week_id)
        if week.status != TimesheetStatus.DRAFT:
            raise StateConflict(f"Only Draft weeks can be force-approved (current: {week.status.value})")
        if not week.has_hours:
            raise NoHoursEntered("This week has no hours to approve")

        now = now_local()
        week = replace(
            week,
            status=TimesheetStatus.APPROVED,
            rejection_comment=None,
            reviewed_at=now,
            updated_at=now,
        )
        self._timesheets.save(week)
        logger.warning("week force-approved from Draft week=%s", week_id)
        return week

    # ---------- queries ----------

    def get_week(self, *, current_role: Optional[Role], current_user_id: str, week_id: str) -> WeekTimesheet:
        week = self._require(week_id)
        if week.employee_id != current_user_id and not (current_role and current_role.is_reviewer):
            raise PermissionDenied("You can only view your own timesheets")
        return self._fill_name(week)

    def week_for_date(self, *, employee_id: str, day: date) -> dict:
        """Id, label and bounds of the week containing ``day``; the week may not exist yet."""
        monday, sunday = week_bounds(day)
        week_id = week_id_for(employee_id, day)
        return {
            "id": week_id,
            "label": week_label(day),
            "week_start": format_display_date(monday),
            "week_end": format_display_date(sunday),
            "days": [
                {"id": d.value, "label": day_label(monday + timedelta(days=d.index))} for d in DayId
            ],
            "exists": self._timesheets.get_by_id(week_id) is not None,
        }

    def _fill_name(self, week: WeekTimesheet) -> WeekTimesheet:
        if week.employee_name:
            return week
        return replace(week, employee_name=self._employee_name(week.employee_id))

    def _list(self, **filters) -> list[WeekTimesheet]:
        try:
            weeks = list(self._timesheets.list_weeks(sort_desc=True, **filters))
        except SortedQueryUnavailable:
            logger.info("falling back to in-memory sort for %s", filters or "all weeks")
            weeks = sorted(
                self._timesheets.list_weeks(sort_desc=False, **filters),
                key=lambda w: display_date_sort_key(w.week_start),
                reverse=True,
            )
        return [self._fill_name(w) for w in weeks]

    def list_weeks_for_employee(self, employee_id: str) -> list[WeekTimesheet]:
        return self._list(employee_id=employee_id)

    def list_weeks_by_status(self, status) -> list[WeekTimesheet]:
        try:
            status = TimesheetStatus(status)
        except ValueError:
            raise ValidationError("Unknown timesheet status")
        return self._list(status=status)

    def list_all_weeks(self) -> list[WeekTimesheet]:
        return self._list()

    def pending_for_review(self) -> list[WeekTimesheet]:
        """Manager queue: Submitted weeks only."""
        return self.list_weeks_by_status(TimesheetStatus.SUBMITTED)

    def visible_weeks(self, *, current_role: Optional[Role], current_user_id: str) -> Sequence[WeekTimesheet]:
        if current_role and current_role.is_reviewer:
            return self.list_all_weeks()
        return self.list_weeks_for_employee(current_user_id)
