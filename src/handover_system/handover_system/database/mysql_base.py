from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """Yield (connection, cursor); commit on success, roll back on any error."""
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


@contextmanager
def persistence_errors(code: str) -> Iterator[None]:
    """Re-raise driver errors as PersistenceError with the given code."""
    try:
        yield
    except mysql.connector.Error as e:
        raise PersistenceError(f"MySQL error: {e}", code=code) from e


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None
