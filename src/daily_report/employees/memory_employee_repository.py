from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import ErrorKind
from ..core.exceptions import DuplicateKeyError, StaleRowError
from ..database.memory import InMemoryDatabase
from .model import Employee
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    """EmployeeRepository over InMemoryDatabase, with the same key rules as MySQL."""

    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def find_by_code(self, code: str) -> Optional[Employee]:
        with self._db.lock:
            employee = self._db.employees.get(code)
            if employee is None or employee.deleted:
                return None
            return employee

    def find_all(self) -> Sequence[Employee]:
        with self._db.lock:
            active = [e for e in self._db.employees.values() if not e.deleted]
        return sorted(active, key=lambda e: e.code)

    def insert(self, employee: Employee) -> Employee:
        with self._db.lock:
            if employee.code in self._db.employees:
                raise DuplicateKeyError(ErrorKind.DUPLICATE_CODE, f"Duplicate entry '{employee.code}' for key 'PRIMARY'")
            self._db.employees[employee.code] = employee
        return employee

    def save(self, employee: Employee) -> Employee:
        with self._db.lock:
            current = self._db.employees.get(employee.code)
            if current is None or current.deleted:
                raise StaleRowError(f"Employee {employee.code} is no longer active")
            # created_at is never rewritten.
            employee = replace(employee, created_at=current.created_at)
            self._db.employees[employee.code] = employee
        return employee
