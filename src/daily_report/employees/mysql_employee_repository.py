from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import ErrorKind, Role
from ..core.exceptions import StaleRowError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "code, name, role, password, delete_flg, created_at, updated_at"


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        code=row["code"],
        name=row["name"],
        role=Role(row["role"]),
        password_hash=row["password"],
        deleted=bool(row["delete_flg"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_code(self, code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE code=%s AND delete_flg=0
                """,
                (code,),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def find_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE delete_flg=0 ORDER BY code")
            return [_to_employee(r) for r in fetchall(cur)]

    def insert(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory, duplicate_kind=ErrorKind.DUPLICATE_CODE) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO employees({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee.code,
                    employee.name,
                    employee.role.value,
                    employee.password_hash,
                    int(employee.deleted),
                    employee.created_at,
                    employee.updated_at,
                ),
            )
        return employee

    def save(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            # created_at is never rewritten.
            cur.execute(
                """
                UPDATE employees
                SET name=%s, role=%s, password=%s, delete_flg=%s, updated_at=%s
                WHERE code=%s AND delete_flg=0
                """,
                (
                    employee.name,
                    employee.role.value,
                    employee.password_hash,
                    int(employee.deleted),
                    employee.updated_at,
                    employee.code,
                ),
            )
            if cur.rowcount == 0:
                raise StaleRowError(f"Employee {employee.code} is no longer active")
        return employee
