from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import ErrorKind
from ..core.exceptions import DuplicateKeyError, StorageError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection,
    *,
    dictionary: bool = True,
    duplicate_kind: Optional[ErrorKind] = None,
):
    """Yield ``(conn, cur)``.

    Joins the active transaction when there is one, otherwise opens, commits
    and closes its own connection. A duplicate-key violation becomes
    ``DuplicateKeyError(duplicate_kind)``; any other driver error becomes
    ``StorageError``.
    """
    shared = conn_factory.active_connection()
    conn = shared if shared is not None else conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            if shared is None:
                conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        if shared is None:
            conn.rollback()
        if duplicate_kind is not None and e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateKeyError(duplicate_kind, str(e)) from e
        raise StorageError(str(e)) from e
    except mysql.connector.Error as e:
        if shared is None:
            conn.rollback()
        raise StorageError(str(e)) from e
    except Exception:
        if shared is None:
            conn.rollback()
        raise
    finally:
        if shared is None:
            conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
