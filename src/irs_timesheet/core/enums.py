from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    EMPLOYEE = "Employee"
    MANAGER = "Manager"
    ADMIN = "Admin"
    SUPER_ADMIN = "Super Admin"

    @property
    def is_admin(self) -> bool:
        return self in {Role.ADMIN, Role.SUPER_ADMIN}

    @property
    def is_reviewer(self) -> bool:
        return self in {Role.MANAGER, Role.ADMIN, Role.SUPER_ADMIN}


class AccountStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    BLOCKED = "Blocked"


class TimesheetStatus(str, Enum):
    """Lifecycle states of a weekly timesheet."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class DayId(str, Enum):
    """Fixed day slots of a week, Monday first."""

    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @property
    def index(self) -> int:
        return list(DayId).index(self)


class ShiftType(str, Enum):
    REGULAR = "Regular"
    NIGHT = "Night"
    WEEKEND = "Weekend"
    OVERTIME = "Overtime"
    OTHER = "Other"


class NotifyChannel(str, Enum):
    """Where credentials messages go after an account is created."""

    SMTP = "smtp"
    MAIL_QUEUE = "mail_queue"
    SHARE = "share"
