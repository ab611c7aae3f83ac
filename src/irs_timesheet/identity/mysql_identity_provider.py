from __future__ import annotations

import uuid

import mysql.connector
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import normalize_email
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .provider import (
    EmailInUse,
    IdentityDisabled,
    IdentityNotFound,
    IdentityProvider,
    InvalidEmail,
    WeakSecret,
    WrongSecret,
)


class MySQLIdentityProvider(IdentityProvider):
    """Identities table with werkzeug password hashes."""

    def __init__(self, conn_factory: DatabaseConnection, *, min_secret_length: int = MIN_PASSWORD_LENGTH):
        self._conn_factory = conn_factory
        self._min_secret_length = int(min_secret_length)

    def create_identity(self, email: str, secret: str) -> str:
        try:
            email = normalize_email(email)
        except ValidationError:
            raise InvalidEmail(email)
        if not secret or len(secret) < self._min_secret_length:
            raise WeakSecret(f"at least {self._min_secret_length} characters")

        identity_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT identity_id FROM identities WHERE email=%s", (email,))
            if fetchone(cur):
                raise EmailInUse(email)
            try:
                cur.execute(
                    """
                    INSERT INTO identities(identity_id, email, password_hash, disabled)
                    VALUES(%s,%s,%s,0)
                    """,
                    (identity_id, email, generate_password_hash(secret)),
                )
            except mysql.connector.IntegrityError:
                raise EmailInUse(email)
        return identity_id

    def verify_identity(self, email: str, secret: str) -> str:
        email = (email or "").strip().lower()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT identity_id, password_hash, disabled FROM identities WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            if not row:
                raise IdentityNotFound(email)
            if bool(row.get("disabled")):
                raise IdentityDisabled(email)

            try:
                ok = check_password_hash(row["password_hash"], secret or "")
            except ValueError:
                # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
                ok = False
            if not ok:
                raise WrongSecret(email)

            cur.execute(
                "UPDATE identities SET last_sign_in_at=NOW() WHERE identity_id=%s",
                (row["identity_id"],),
            )
            return str(row["identity_id"])

    def sign_out(self, identity_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE identities SET last_sign_out_at=NOW() WHERE identity_id=%s",
                (identity_id,),
            )

    def delete_identity(self, identity_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM identities WHERE identity_id=%s", (identity_id,))
            return cur.rowcount > 0
