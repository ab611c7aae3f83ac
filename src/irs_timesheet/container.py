from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .identity.mysql_identity_provider import MySQLIdentityProvider
from .identity.provider import IdentityProvider
from .identity.service import AuthService
from .notifications.factory import NotifierFactory
from .notifications.mysql_mail_queue_repository import MySQLMailQueueRepository
from .reports.service import ReportService
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.repository import TimesheetRepository
from .timesheets.service import TimesheetService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    identity: IdentityProvider
    users_repo: UserRepository
    timesheets_repo: TimesheetRepository

    auth_service: AuthService
    user_service: UserService
    timesheet_service: TimesheetService
    report_service: ReportService


def wire_services(
    *,
    identity: IdentityProvider,
    users_repo: UserRepository,
    timesheets_repo: TimesheetRepository,
    notifier=None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    timesheet_service = TimesheetService(timesheets_repo, users_repo)
    return Container(
        conn=conn,
        identity=identity,
        users_repo=users_repo,
        timesheets_repo=timesheets_repo,
        auth_service=AuthService(identity, users_repo),
        user_service=UserService(users_repo, identity, notifier),
        timesheet_service=timesheet_service,
        report_service=ReportService(timesheet_service, users_repo),
    )


def build_container(*, db_config: dict, notify_channel: str = "share", smtp_config: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    notifier = NotifierFactory(
        smtp_config=smtp_config,
        mail_queue=MySQLMailQueueRepository(conn),
    ).for_channel(notify_channel)

    return wire_services(
        identity=MySQLIdentityProvider(conn),
        users_repo=MySQLUserRepository(conn),
        timesheets_repo=MySQLTimesheetRepository(conn),
        notifier=notifier,
        conn=conn,
    )
