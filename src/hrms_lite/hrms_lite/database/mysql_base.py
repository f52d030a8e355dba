from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errors as mysql_errors

from ..core.constants import ER_DUP_ENTRY, ER_NO_REFERENCED_ROW
from .connection import DatabaseConnection

_DUP_KEY_RE = re.compile(r"for key '(?:[^'.]*\.)?([^']+)'")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cur)``; commit on success, roll back on any error.

    Everything executed inside one ``with`` block is a single transaction.
    """
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


def duplicate_key_name(e: Exception) -> Optional[str]:
    """Name of the unique key a write collided with, or None if ``e`` is not a duplicate-key error."""
    if not isinstance(e, mysql_errors.IntegrityError) or getattr(e, "errno", None) != ER_DUP_ENTRY:
        return None
    m = _DUP_KEY_RE.search(str(getattr(e, "msg", "") or e))
    return m.group(1) if m else ""


def is_missing_reference(e: Exception) -> bool:
    return isinstance(e, mysql_errors.IntegrityError) and getattr(e, "errno", None) == ER_NO_REFERENCED_ROW
