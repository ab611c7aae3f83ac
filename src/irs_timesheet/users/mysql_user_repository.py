from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AccountStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Account
from .repository import UserRepository

_COLUMNS = "user_id, name, email, role, status, created"
_PATCHABLE = ("name", "email", "role", "status")


def _row_to_account(row: dict) -> Account:
    return Account(
        account_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]) if row.get("role") else None,
        status=AccountStatus(row.get("status") or AccountStatus.ACTIVE.value),
        created=row["created"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (account_id,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def find_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE LOWER(email)=%s LIMIT 1",
                ((email or "").strip().lower(),),
            )
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def create(self, account: Account) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, name, email, role, status, created)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    account.account_id,
                    account.name,
                    account.email,
                    account.role.value if account.role else None,
                    account.status.value,
                    account.created,
                ),
            )

    def update_fields(self, account_id: str, fields: dict) -> bool:
        sets: list[str] = []
        params: list[object] = []
        for key in _PATCHABLE:
            if key not in fields:
                continue
            value = fields[key]
            sets.append(f"{key}=%s")
            params.append(value.value if isinstance(value, (Role, AccountStatus)) else value)

        if not sets:
            return self.get_by_id(account_id) is not None

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE users SET {', '.join(sets)} WHERE user_id=%s",
                tuple(params + [account_id]),
            )
            # rowcount is 0 when values are unchanged, so confirm existence separately.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (account_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, account_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (account_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created DESC, name")
            return [_row_to_account(r) for r in fetchall(cur)]
