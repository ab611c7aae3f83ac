from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import MailQueueRepository


class MySQLMailQueueRepository(MailQueueRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def enqueue(self, *, to: str, subject: str, html: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO mail(to_email, subject, html) VALUES(%s,%s,%s)",
                (to, subject, html),
            )
            return int(cur.lastrowid)
