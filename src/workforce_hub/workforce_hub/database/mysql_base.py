from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateRecordError
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
    except IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateRecordError(str(e)) from e
        raise
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


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Read a TIME column as datetime.time.

    The connector hands TIME back as a timedelta (C extension), a time, or an
    'HH:MM[:SS]' string depending on build and cursor type.
    """

    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, (seconds % 3600) // 60, seconds % 60)

    if isinstance(value, str):
        pieces = [int(p) for p in value.strip().split(":") if p]
        if len(pieces) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        return time(*pieces[:3])

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None
