from __future__ import annotations

from contextlib import contextmanager

import pytest
from werkzeug.security import generate_password_hash

from irs_timesheet.identity import mysql_identity_provider as mod
from irs_timesheet.identity.provider import EmailInUse, IdentityNotFound, InvalidEmail, WeakSecret, WrongSecret


class FakeCursor:
    """Answers the identity queries from a dict keyed by email."""

    def __init__(self, rows: dict):
        self.rows = rows
        self.executed: list[tuple[str, tuple]] = []
        self._result = None

    def execute(self, sql: str, params=()):
        self.executed.append((sql, params))
        if sql.lstrip().upper().startswith("SELECT"):
            self._result = self.rows.get(params[0])
        elif sql.lstrip().upper().startswith("INSERT"):
            identity_id, email, password_hash = params
            self.rows[email] = {"identity_id": identity_id, "password_hash": password_hash, "disabled": 0}

    def fetchone(self):
        return self._result


@pytest.fixture
def cursor(monkeypatch):
    cur = FakeCursor({})

    @contextmanager
    def fake_db_cursor(_factory, **_kwargs):
        yield None, cur

    monkeypatch.setattr(mod, "db_cursor", fake_db_cursor)
    return cur


def test_create_hashes_secret_and_rejects_duplicates(cursor):
    provider = mod.MySQLIdentityProvider(conn_factory=None)

    identity_id = provider.create_identity("New@IRS.com", "pw12345")

    stored = cursor.rows["new@irs.com"]
    assert stored["identity_id"] == identity_id
    assert stored["password_hash"] != "pw12345"
    with pytest.raises(EmailInUse):
        provider.create_identity("new@irs.com", "pw12345")


def test_create_validates_email_and_secret(cursor):
    provider = mod.MySQLIdentityProvider(conn_factory=None)
    with pytest.raises(InvalidEmail):
        provider.create_identity("not-an-email", "pw12345")
    with pytest.raises(WeakSecret):
        provider.create_identity("a@irs.com", "123")


def test_verify(cursor):
    cursor.rows["a@irs.com"] = {
        "identity_id": "abc",
        "password_hash": generate_password_hash("pw12345"),
        "disabled": 0,
    }
    provider = mod.MySQLIdentityProvider(conn_factory=None)

    assert provider.verify_identity("A@irs.com ", "pw12345") == "abc"
    with pytest.raises(WrongSecret):
        provider.verify_identity("a@irs.com", "bad-secret")
    with pytest.raises(IdentityNotFound):
        provider.verify_identity("b@irs.com", "pw12345")
