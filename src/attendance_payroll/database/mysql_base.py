from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import PersistenceFailure, RecordConflict
from .connection import DatabaseConnection


def _translate(exc: mysql.connector.Error) -> PersistenceFailure:
    if isinstance(exc, mysql.connector.IntegrityError) and exc.errno == errorcode.ER_DUP_ENTRY:
        return RecordConflict(str(exc))
    return PersistenceFailure(str(exc))


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) for one unit of work.

    Commits when the block exits cleanly and rolls back otherwise. Driver
    errors leave as PersistenceFailure; a duplicate key leaves as RecordConflict.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise PersistenceFailure(f"Database unavailable: {e}") from e

    cur = None
    try:
        cur = conn.cursor(dictionary=dictionary)
        yield conn, cur
        conn.commit()
    except mysql.connector.Error as e:
        conn.rollback()
        raise _translate(e) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        if cur is not None:
            cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Coerce a TIME column to datetime.time.

    Depending on the connector build the value arrives as time, timedelta
    (seconds since midnight) or an 'HH:MM[:SS]' string.
    """

    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)

    if isinstance(value, str):
        pieces = [int(p) for p in value.strip().split(":") if p]
        if len(pieces) not in (2, 3):
            raise ValueError(f"Invalid time string: {value!r}")
        return time(*pieces)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
