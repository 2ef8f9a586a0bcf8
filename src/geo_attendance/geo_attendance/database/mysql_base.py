from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
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


def to_db_datetime(instant: datetime) -> datetime:
    """Aware instant -> naive UTC for DATETIME columns."""

    if instant.tzinfo is None:
        return instant
    return instant.astimezone(timezone.utc).replace(tzinfo=None)


def from_db_datetime(value: datetime) -> datetime:
    """Naive UTC DATETIME -> aware instant."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME column -> ``datetime.time``.

    The C extension hands TIME back as a timedelta since midnight, the pure
    connector sometimes as ``"HH:MM:SS"``.
    """

    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        return (datetime.min + value % timedelta(days=1)).time()
    if isinstance(value, str):
        h, m, *rest = (int(p) for p in value.strip().split(":"))
        return time(h, m, rest[0] if rest else 0)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
