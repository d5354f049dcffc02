from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest
from mysql.connector import errorcode

from daily_report.core.enums import ErrorKind, Role
from daily_report.core.exceptions import DuplicateKeyError, StaleRowError, StorageError
from daily_report.database.connection import DBConfig, DatabaseConnection
from daily_report.employees.model import Employee
from daily_report.employees.mysql_employee_repository import MySQLEmployeeRepository
from daily_report.employees.password_policy import PasswordPolicy
from daily_report.employees.service import EmployeeService
from daily_report.reports.model import Report
from daily_report.reports.mysql_report_repository import MySQLReportRepository
from daily_report.reports.service import ReportService

NOW = datetime(2026, 2, 2, 9, 0, 0)

EMPLOYEE_ROW = {
    "code": "E001", "name": "Taro", "role": "GENERAL", "password": "hash",
    "delete_flg": 0, "created_at": NOW, "updated_at": NOW,
}
REPORT_ROW = {
    "id": 7, "report_date": date(2026, 2, 2), "title": "t", "content": "c", "employee_code": "E001",
    "delete_flg": 0, "created_at": NOW, "updated_at": NOW,
}


class FakeCursor:
    def __init__(self, conn: "FakeConnection"):
        self._conn = conn
        self.lastrowid = None
        self.rowcount = -1

    def execute(self, sql, params=()):
        sql = " ".join(sql.split())
        self._conn.executed.append((sql, params))
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise self._conn.error
        for fragment, rows in self._conn.responses.items():
            if fragment in sql:
                self._conn.rows = list(rows)
        self.lastrowid = self._conn.lastrowid
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows.pop(0) if self._conn.rows else None

    def fetchall(self):
        rows, self._conn.rows = self._conn.rows, []
        return rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows=None, *, responses=None, fail_on=None, error=None, lastrowid=None, rowcount=1):
        self.rows = list(rows or [])
        self.responses = dict(responses or {})
        self.fail_on = fail_on
        self.error = error
        self.lastrowid = lastrowid
        self.rowcount = rowcount
        self.executed: list[tuple[str, tuple]] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


def _factory(conn: FakeConnection) -> DatabaseConnection:
    factory = DatabaseConnection(DBConfig(host="db", port=3306, user="u", password="p", database="d"))
    factory.connect = lambda: conn
    return factory


def _dup_entry() -> mysql.connector.IntegrityError:
    return mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)


def _services(conn: FakeConnection) -> tuple[EmployeeService, ReportService]:
    factory = _factory(conn)
    reports = ReportService(MySQLReportRepository(factory), factory, clock=lambda: NOW)
    employees = EmployeeService(
        MySQLEmployeeRepository(factory),
        PasswordPolicy(hash_method="pbkdf2:sha256:1000"),
        reports,
        factory,
        clock=lambda: NOW,
    )
    return employees, reports


def test_find_by_code_filters_deleted_rows():
    conn = FakeConnection(rows=[EMPLOYEE_ROW])
    employee = MySQLEmployeeRepository(_factory(conn)).find_by_code("E001")

    assert employee == Employee(code="E001", name="Taro", role=Role.GENERAL, password_hash="hash",
                                created_at=NOW, updated_at=NOW)
    sql, params = conn.executed[0]
    assert "delete_flg=0" in sql
    assert params == ("E001",)
    assert conn.commits == 1 and conn.closed


def test_employee_insert_conflict_becomes_duplicate_code():
    conn = FakeConnection(fail_on="INSERT INTO employees", error=_dup_entry())
    repo = MySQLEmployeeRepository(_factory(conn))

    with pytest.raises(DuplicateKeyError) as exc:
        repo.insert(Employee(code="E001", name="Taro", role=Role.GENERAL, password_hash="h",
                             created_at=NOW, updated_at=NOW))

    assert exc.value.kind is ErrorKind.DUPLICATE_CODE
    assert conn.rollbacks == 1 and conn.commits == 0


def test_employee_insert_is_a_single_insert():
    conn = FakeConnection()
    MySQLEmployeeRepository(_factory(conn)).insert(
        Employee(code="E001", name="Taro", role=Role.GENERAL, password_hash="h", created_at=NOW, updated_at=NOW)
    )

    assert [sql.split()[0] for sql, _ in conn.executed] == ["INSERT"]


def test_employee_update_targets_the_active_row():
    conn = FakeConnection()
    MySQLEmployeeRepository(_factory(conn)).save(
        Employee(code="E001", name="Taro", role=Role.ADMIN, password_hash="h", deleted=True, updated_at=NOW)
    )

    [(sql, params)] = conn.executed
    assert sql.startswith("UPDATE employees")
    assert "delete_flg=0" in sql
    assert "created_at" not in sql
    assert params == ("Taro", "ADMIN", "h", 1, NOW, "E001")


def test_employee_update_of_missing_row_is_stale():
    conn = FakeConnection(rowcount=0)

    with pytest.raises(StaleRowError):
        MySQLEmployeeRepository(_factory(conn)).save(
            Employee(code="E001", name="Taro", role=Role.GENERAL, password_hash="h", updated_at=NOW)
        )

    assert conn.rollbacks == 1 and conn.commits == 0


def test_create_racing_another_create_returns_duplicate_code():
    # The check sees no row; the other transaction's insert wins the primary key.
    conn = FakeConnection(fail_on="INSERT INTO employees", error=_dup_entry())
    employees, _ = _services(conn)

    result = employees.create(Employee(code="E001", name="Jiro", role=Role.ADMIN), password="Passw0rd")

    assert result is ErrorKind.DUPLICATE_CODE
    assert [sql.split()[0] for sql, _ in conn.executed] == ["SELECT", "INSERT"]
    assert conn.rollbacks == 1 and conn.commits == 0


def test_employee_update_racing_a_delete_returns_already_deleted():
    conn = FakeConnection(rows=[EMPLOYEE_ROW], rowcount=0)
    employees, _ = _services(conn)

    result = employees.update(Employee(code="E001", name="Taro Y", role=Role.GENERAL))

    assert result is ErrorKind.ALREADY_DELETED
    assert conn.rollbacks == 1 and conn.commits == 0


def test_report_update_racing_a_delete_returns_already_deleted():
    conn = FakeConnection(responses={"id<>%s": [], "WHERE id=%s": [REPORT_ROW]}, rowcount=0)
    _, reports = _services(conn)

    result = reports.update(
        Report(id=7, report_date=date(2026, 2, 3), title="t2", content="c2", employee_code="E001")
    )

    assert result is ErrorKind.ALREADY_DELETED
    assert [sql.split()[0] for sql, _ in conn.executed] == ["SELECT", "SELECT", "UPDATE"]
    assert conn.rollbacks == 1 and conn.commits == 0


def test_report_soft_delete_racing_another_delete_is_a_no_op():
    conn = FakeConnection(responses={"WHERE id=%s": [REPORT_ROW]}, rowcount=0)
    _, reports = _services(conn)

    assert reports.soft_delete(7) is None
    assert conn.commits == 0


def test_report_insert_returns_generated_id():
    conn = FakeConnection(lastrowid=42)
    saved = MySQLReportRepository(_factory(conn)).save(
        Report(id=None, report_date=date(2026, 2, 2), title="t", content="c", employee_code="E001",
               created_at=NOW, updated_at=NOW)
    )

    assert saved.id == 42


def test_report_unique_key_becomes_duplicate_report():
    conn = FakeConnection(fail_on="INSERT INTO reports", error=_dup_entry())

    with pytest.raises(DuplicateKeyError) as exc:
        MySQLReportRepository(_factory(conn)).save(
            Report(id=None, report_date=date(2026, 2, 2), title="t", content="c", employee_code="E001")
        )

    assert exc.value.kind is ErrorKind.DUPLICATE_REPORT


def test_other_driver_errors_are_opaque():
    conn = FakeConnection(fail_on="SELECT", error=mysql.connector.OperationalError(msg="gone away", errno=2006))

    with pytest.raises(StorageError):
        MySQLReportRepository(_factory(conn)).find_all_ordered_by_date_desc_code_asc()


def test_find_all_orders_by_date_desc_code_asc():
    conn = FakeConnection()
    MySQLReportRepository(_factory(conn)).find_all_ordered_by_date_desc_code_asc()

    sql, _ = conn.executed[0]
    assert "ORDER BY report_date DESC, employee_code ASC" in sql
    assert "delete_flg=0" in sql


def test_transaction_shares_one_connection_and_commits_once():
    conn = FakeConnection()
    factory = _factory(conn)
    repo = MySQLReportRepository(factory)

    with factory.transaction():
        repo.find_by_id(1)
        with factory.transaction():
            repo.find_by_employee_code_and_date("E001", date(2026, 2, 2))

    assert len(conn.executed) == 2
    assert conn.commits == 1
    assert conn.closed
    assert factory.active_connection() is None


def test_transaction_rolls_back_on_error():
    conn = FakeConnection(fail_on="INSERT INTO reports", error=_dup_entry())
    factory = _factory(conn)
    repo = MySQLReportRepository(factory)

    with pytest.raises(DuplicateKeyError):
        with factory.transaction():
            repo.find_by_employee_code_and_date("E001", date(2026, 2, 2))
            repo.save(Report(id=None, report_date=date(2026, 2, 2), title="t", content="c", employee_code="E001"))

    assert conn.rollbacks == 1
    assert conn.commits == 0
