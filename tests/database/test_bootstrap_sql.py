from __future__ import annotations

from irs_timesheet.database.bootstrap import (
    _iter_sql_statements,
    _strip_comments,
    _strip_create_db_and_use,
    read_schema_sql,
)


def test_packaged_schema_has_all_tables():
    sql = read_schema_sql()
    for table in ("identities", "users", "timesheets", "mail"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in sql


def test_statements_split_on_semicolons_outside_quotes():
    sql = "CREATE TABLE a (x INT);\nINSERT INTO a VALUES ('x;y');\n"
    assert list(_iter_sql_statements(sql)) == ["CREATE TABLE a (x INT)", "INSERT INTO a VALUES ('x;y')"]


def test_schema_is_applied_without_database_switching():
    sql = _strip_comments(_strip_create_db_and_use("CREATE DATABASE foo;\nUSE foo;\n-- note\nSELECT 1;"))
    assert list(_iter_sql_statements(sql)) == ["SELECT 1"]
