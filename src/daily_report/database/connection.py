from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import mysql.connector
from mysql.connector.constants import ClientFlag

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)

_active_connection: ContextVar[Optional[Any]] = ContextVar("daily_report_active_connection", default=None)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: Outside a transaction every repository call gets a short-lived
    connection. Inside ``transaction()`` all calls share one connection that is
    committed or rolled back as a unit.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                # rowcount reports matched rows, so an UPDATE of an unchanged row is not 0.
                client_flags=[ClientFlag.FOUND_ROWS],
            )
        except mysql.connector.Error as e:
            logger.error("Cannot connect to %s@%s:%s/%s: %s",
                         self._config.user, self._config.host, self._config.port, self._config.database, e)
            raise StorageError("Database is unavailable") from e

    def active_connection(self):
        return _active_connection.get()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if _active_connection.get() is not None:
            # Nested: join the outer transaction.
            yield
            return

        conn = self.connect()
        token = _active_connection.set(conn)
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            _active_connection.reset(token)
            conn.close()
