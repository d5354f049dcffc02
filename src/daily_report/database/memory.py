from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from ..employees.model import Employee
    from ..reports.model import Report


class InMemoryDatabase:
    """Process-local storage shared by the in-memory repositories.

    Rows are never removed, soft-deleted ones included, mirroring the MySQL
    tables. ``transaction()`` holds a re-entrant lock and restores a snapshot
    of both tables if the block raises.
    """

    def __init__(self):
        self.employees: dict[str, "Employee"] = {}
        self.reports: dict[int, "Report"] = {}
        self._next_report_id = 1
        self._lock = threading.RLock()
        self._depth = 0

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def next_report_id(self) -> int:
        with self._lock:
            report_id = self._next_report_id
            self._next_report_id += 1
            return report_id

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            employees = dict(self.employees)
            reports = dict(self.reports)
            self._depth = 1
            try:
                yield
            except Exception:
                self.employees.clear()
                self.employees.update(employees)
                self.reports.clear()
                self.reports.update(reports)
                raise
            finally:
                self._depth = 0
