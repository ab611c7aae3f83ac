from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import ExternalServiceError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Errors meaning the server cannot sort this result (the MySQL analogue of a missing index):
# 1028 ER_FILSORT_ABORT, 1038 ER_OUT_OF_SORTMEMORY.
SORT_UNAVAILABLE_ERRNOS = frozenset({1028, 1038})


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("database connection failed: %s", e)
        raise ExternalServiceError("Database is unavailable, please retry") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_sort_unavailable(error: mysql.connector.Error) -> bool:
    return getattr(error, "errno", None) in SORT_UNAVAILABLE_ERRNOS


def load_json(value: Any, default: Any) -> Any:
    """Decode a JSON column; connectors return str, bytes or already-parsed values."""
    if value is None:
        return default
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value) if value.strip() else default
    return value


def dump_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
