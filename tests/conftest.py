from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

import pytest

from irs_timesheet.common.datetime_utils import parse_display_date
from irs_timesheet.container import wire_services
from irs_timesheet.core.enums import AccountStatus, NotifyChannel, Role
from irs_timesheet.core.exceptions import ExternalServiceError, SortedQueryUnavailable
from irs_timesheet.identity.provider import (
    EmailInUse,
    IdentityDisabled,
    IdentityNotFound,
    InvalidEmail,
    WeakSecret,
    WrongSecret,
)
from irs_timesheet.notifications.base import CredentialsNotifier, NotificationOutcome
from irs_timesheet.users.model import Account


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[str, Account] = {}
        self.fail_create = False

    def get_by_id(self, account_id: str) -> Optional[Account]:
        return self.by_id.get(account_id)

    def find_by_email(self, email: str) -> Optional[Account]:
        email = (email or "").strip().lower()
        for a in self.by_id.values():
            if a.email.lower() == email:
                return a
        return None

    def create(self, account: Account) -> None:
        if self.fail_create:
            raise ConnectionError("directory write failed")
        self.by_id[account.account_id] = account

    def update_fields(self, account_id: str, fields: dict) -> bool:
        if account_id not in self.by_id:
            return False
        self.by_id[account_id] = replace(self.by_id[account_id], **fields)
        return True

    def delete_by_id(self, account_id: str) -> bool:
        return self.by_id.pop(account_id, None) is not None

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda a: a.created, reverse=True)


@dataclass
class _Identity:
    identity_id: str
    secret: str
    disabled: bool = False


class InMemoryIdentity:
    def __init__(self):
        self.by_email: dict[str, _Identity] = {}
        self.signed_out: list[str] = []
        self.deleted: list[str] = []
        self.create_calls = 0
        self._seq = 0

    def create_identity(self, email: str, secret: str) -> str:
        self.create_calls += 1
        email = (email or "").strip().lower()
        if "@" not in email:
            raise InvalidEmail(email)
        if len(secret or "") < 6:
            raise WeakSecret("too short")
        if email in self.by_email:
            raise EmailInUse(email)
        self._seq += 1
        identity_id = f"u{self._seq}"
        self.by_email[email] = _Identity(identity_id, secret)
        return identity_id

    def verify_identity(self, email: str, secret: str) -> str:
        rec = self.by_email.get((email or "").strip().lower())
        if rec is None:
            raise IdentityNotFound(email)
        if rec.disabled:
            raise IdentityDisabled(email)
        if rec.secret != secret:
            raise WrongSecret(email)
        return rec.identity_id

    def sign_out(self, identity_id: str) -> None:
        self.signed_out.append(identity_id)

    def delete_identity(self, identity_id: str) -> bool:
        for email, rec in list(self.by_email.items()):
            if rec.identity_id == identity_id:
                del self.by_email[email]
                self.deleted.append(identity_id)
                return True
        return False


class InMemoryTimesheets:
    def __init__(self):
        self.by_id = {}
        self.sort_unavailable = False
        self.saves = 0

    def get_by_id(self, week_id: str):
        return self.by_id.get(week_id)

    def save(self, week) -> None:
        self.saves += 1
        self.by_id[week.week_id] = week

    def list_weeks(self, *, employee_id=None, status=None, sort_desc=True):
        weeks = [
            w
            for w in self.by_id.values()
            if (employee_id is None or w.employee_id == employee_id) and (status is None or w.status == status)
        ]
        if not sort_desc:
            return weeks
        if self.sort_unavailable:
            raise SortedQueryUnavailable("index missing")
        return sorted(weeks, key=lambda w: parse_display_date(w.week_start), reverse=True)


class RecordingNotifier(CredentialsNotifier):
    channel = NotifyChannel.SHARE

    def __init__(self, *, fail: bool = False):
        self.messages = []
        self.fail = fail

    def deliver(self, message) -> NotificationOutcome:
        if self.fail:
            raise ExternalServiceError("mail server down")
        self.messages.append(message)
        return NotificationOutcome(channel=self.channel, delivered=True, share_text=message.text())


@dataclass
class World:
    users: InMemoryUsers = field(default_factory=InMemoryUsers)
    identity: InMemoryIdentity = field(default_factory=InMemoryIdentity)
    timesheets: InMemoryTimesheets = field(default_factory=InMemoryTimesheets)
    notifier: RecordingNotifier = field(default_factory=RecordingNotifier)

    def add_account(
        self,
        name: str,
        email: str,
        role: Optional[Role],
        *,
        password: str = "secret123",
        status: AccountStatus = AccountStatus.ACTIVE,
        created: date = date(2024, 1, 1),
    ) -> Account:
        account_id = self.identity.create_identity(email, password)
        account = Account(
            account_id=account_id,
            name=name,
            email=email,
            role=role,
            status=status,
            created=created,
        )
        self.users.create(account)
        return account

    def container(self):
        return wire_services(
            identity=self.identity,
            users_repo=self.users,
            timesheets_repo=self.timesheets,
            notifier=self.notifier,
        )


@pytest.fixture
def world() -> World:
    return World()


@pytest.fixture
def fixed_now(monkeypatch):
    """Freeze service clocks at Wednesday 06/03/2024 10:00."""
    from datetime import datetime

    now = datetime(2024, 3, 6, 10, 0)
    for module in (
        "irs_timesheet.timesheets.service",
        "irs_timesheet.users.service",
        "irs_timesheet.database.seed",
    ):
        monkeypatch.setattr(f"{module}.now_local", lambda: now)
    return now
