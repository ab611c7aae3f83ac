"""Demo data: one account per role and four weeks per employee."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import day_label, format_display_date, now_local, week_bounds, week_id_for, week_label
from ..core.enums import AccountStatus, DayId, Role, TimesheetStatus
from ..identity.provider import EmailInUse, IdentityProvider
from ..timesheets.model import DayEntry, WeekTimesheet
from ..timesheets.repository import TimesheetRepository
from ..users.model import Account
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

DEMO_USERS = (
    {"email": "superadmin@irs.com", "password": "SuperAdmin123!", "name": "Super Admin", "role": Role.SUPER_ADMIN},
    {"email": "admin@irs.com", "password": "Admin123!", "name": "Admin User", "role": Role.ADMIN},
    {"email": "manager@irs.com", "password": "Manager123!", "name": "Manager User", "role": Role.MANAGER},
    {"email": "employee1@irs.com", "password": "Employee123!", "name": "John Doe", "role": Role.EMPLOYEE},
    {"email": "employee2@irs.com", "password": "Employee123!", "name": "Jane Smith", "role": Role.EMPLOYEE},
)

# Current week first.
_WEEK_STATUSES = (
    TimesheetStatus.DRAFT,
    TimesheetStatus.SUBMITTED,
    TimesheetStatus.APPROVED,
    TimesheetStatus.APPROVED,
)
_WEEKDAY_HOURS = (8.0, 7.5, 8.5, 8.0, 7.75)


def _ensure_account(identity: IdentityProvider, users: UserRepository, demo: dict, today: date) -> str:
    try:
        account_id = identity.create_identity(demo["email"], demo["password"])
        logger.info("seed: created identity %s", demo["email"])
    except EmailInUse:
        account_id = identity.verify_identity(demo["email"], demo["password"])

    if users.get_by_id(account_id) is None:
        users.create(
            Account(
                account_id=account_id,
                name=demo["name"],
                email=demo["email"],
                role=demo["role"],
                status=AccountStatus.ACTIVE,
                created=today,
            )
        )
        logger.info("seed: created profile %s", demo["name"])
    return account_id


def sample_weeks(employee_id: str, employee_name: str, today: date) -> list[WeekTimesheet]:
    now = now_local()
    weeks = []
    for i, status in enumerate(_WEEK_STATUSES):
        monday, sunday = week_bounds(today - timedelta(days=7 * i))
        days = [
            DayEntry(
                day_id=d,
                label=day_label(monday + timedelta(days=d.index)),
                hours=_WEEKDAY_HOURS[d.index],
            )
            for d in list(DayId)[:5]
        ]
        if i % 2:
            days.append(DayEntry(day_id=DayId.SAT, label=day_label(monday + timedelta(days=5)), hours=4.0))

        weeks.append(
            WeekTimesheet(
                week_id=week_id_for(employee_id, monday),
                label=week_label(monday),
                week_start=format_display_date(monday),
                status=status,
                employee_id=employee_id,
                employee_name=employee_name,
                days=tuple(days),
                created_at=now,
                updated_at=now,
                submitted_at=now if status != TimesheetStatus.DRAFT else None,
                reviewed_at=now if status == TimesheetStatus.APPROVED else None,
            )
        )
    return weeks


def seed_demo_data(
    identity: IdentityProvider,
    users: UserRepository,
    timesheets: TimesheetRepository,
    *,
    today: Optional[date] = None,
) -> dict:
    """Idempotent: existing identities, profiles and weeks are left alone."""
    today = today or now_local().date()
    created_weeks = 0
    ids: dict[str, str] = {}

    for demo in DEMO_USERS:
        ids[demo["email"]] = _ensure_account(identity, users, demo, today)

    for demo in DEMO_USERS:
        if demo["role"] != Role.EMPLOYEE:
            continue
        for week in sample_weeks(ids[demo["email"]], demo["name"], today):
            if timesheets.get_by_id(week.week_id) is None:
                timesheets.save(week)
                created_weeks += 1

    logger.info("seed: %d accounts, %d new weeks", len(ids), created_weeks)
    return {"accounts": len(ids), "weeks": created_weeks}
