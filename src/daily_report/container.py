from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .common.datetime_utils import now_local
from .core.constants import DEFAULT_PASSWORD_HASH_METHOD
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import InMemoryDatabase
from .database.transaction import TransactionManager
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.password_policy import PasswordPolicy
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .reports.memory_report_repository import InMemoryReportRepository
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    tx: TransactionManager

    employees_repo: EmployeeRepository
    reports_repo: ReportRepository

    password_policy: PasswordPolicy
    auth_service: AuthService
    employee_service: EmployeeService
    report_service: ReportService


def _wire(
    tx: TransactionManager,
    employees_repo: EmployeeRepository,
    reports_repo: ReportRepository,
    *,
    password_hash_method: str,
    clock: Callable[[], datetime],
) -> Container:
    password_policy = PasswordPolicy(hash_method=password_hash_method)
    report_service = ReportService(reports_repo, tx, clock=clock)
    employee_service = EmployeeService(employees_repo, password_policy, report_service, tx, clock=clock)
    auth_service = AuthService(employees_repo, password_policy)

    return Container(
        tx=tx,
        employees_repo=employees_repo,
        reports_repo=reports_repo,
        password_policy=password_policy,
        auth_service=auth_service,
        employee_service=employee_service,
        report_service=report_service,
    )


def build_container(
    *,
    db_config: dict,
    password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return _wire(
        conn,
        MySQLEmployeeRepository(conn),
        MySQLReportRepository(conn),
        password_hash_method=password_hash_method,
        clock=clock,
    )


def build_memory_container(
    *,
    db: Optional[InMemoryDatabase] = None,
    password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    db = db or InMemoryDatabase()
    return _wire(
        db,
        InMemoryEmployeeRepository(db),
        InMemoryReportRepository(db),
        password_hash_method=password_hash_method,
        clock=clock,
    )
