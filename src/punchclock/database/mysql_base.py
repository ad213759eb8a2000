from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits on success, rolls back on any error. Driver errors are re-raised
    as ``StoreError``; domain errors pass through unchanged.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.exception("Could not connect to the record store")
        raise StoreError("Record store unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.exception("Record store operation failed")
        raise StoreError("Database error") from e
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


def fetch_scalar(cur, key: str) -> Any:
    row = fetchone(cur)
    return row.get(key) if row else None


def as_float(value: Any) -> Optional[float]:
    """DECIMAL/float/None -> float, keeping None."""
    return None if value is None else float(value)


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as ``time``, ``timedelta`` or ``'HH:MM[:SS]'`` depending on the connector."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
