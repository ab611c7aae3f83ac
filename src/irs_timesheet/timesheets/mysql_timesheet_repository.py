from __future__ import annotations

import logging
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import TimesheetStatus
from ..core.exceptions import SortedQueryUnavailable
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, dump_json, fetchall, fetchone, is_sort_unavailable, load_json
from .model import DayEntry, WeekTimesheet
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)

_COLUMNS = (
    "week_id, label, week_start, status, employee_id, employee_name, days, rejection_comment, "
    "created_at, updated_at, submitted_at, reviewed_at"
)


def _row_to_week(row: dict) -> WeekTimesheet:
    days = [DayEntry.from_dict(d) for d in load_json(row.get("days"), [])]
    return WeekTimesheet(
        week_id=row["week_id"],
        label=row["label"],
        week_start=row["week_start"],
        status=TimesheetStatus(row["status"]),
        employee_id=str(row["employee_id"]),
        employee_name=row.get("employee_name"),
        days=tuple(sorted(days, key=lambda d: d.day_id.index)),
        rejection_comment=row.get("rejection_comment"),
        created_at=as_datetime(row.get("created_at")),
        updated_at=as_datetime(row.get("updated_at")),
        submitted_at=as_datetime(row.get("submitted_at")),
        reviewed_at=as_datetime(row.get("reviewed_at")),
    )


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, week_id: str) -> Optional[WeekTimesheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM timesheets WHERE week_id=%s", (week_id,))
            row = fetchone(cur)
            return _row_to_week(row) if row else None

    def save(self, week: WeekTimesheet) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timesheets(
                    week_id, label, week_start, status, employee_id, employee_name, days,
                    rejection_comment, created_at, updated_at, submitted_at, reviewed_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    label=VALUES(label),
                    week_start=VALUES(week_start),
                    status=VALUES(status),
                    employee_name=VALUES(employee_name),
                    days=VALUES(days),
                    rejection_comment=VALUES(rejection_comment),
                    updated_at=VALUES(updated_at),
                    submitted_at=VALUES(submitted_at),
                    reviewed_at=VALUES(reviewed_at)
                """,
                (
                    week.week_id,
                    week.label,
                    week.week_start,
                    week.status.value,
                    week.employee_id,
                    week.employee_name,
                    dump_json([d.to_dict() for d in week.days]),
                    week.rejection_comment,
                    week.created_at,
                    week.updated_at,
                    week.submitted_at,
                    week.reviewed_at,
                ),
            )

    def list_weeks(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[TimesheetStatus] = None,
        sort_desc: bool = True,
    ) -> Sequence[WeekTimesheet]:
        where = []
        params: list = []
        if employee_id is not None:
            where.append("employee_id=%s")
            params.append(employee_id)
        if status is not None:
            where.append("status=%s")
            params.append(TimesheetStatus(status).value)

        sql = f"SELECT {_COLUMNS} FROM timesheets"
        if where:
            sql += " WHERE " + " AND ".join(where)
        if sort_desc:
            sql += " ORDER BY STR_TO_DATE(week_start, %s) DESC"
            params.append("%d/%m/%Y")

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, tuple(params))
                return [_row_to_week(r) for r in fetchall(cur)]
        except mysql.connector.Error as e:
            if sort_desc and is_sort_unavailable(e):
                logger.warning("sorted timesheet query unavailable (errno=%s)", e.errno)
                raise SortedQueryUnavailable(str(e)) from e
            raise
