from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import ErrorKind
from ..core.exceptions import AuthenticationError, DuplicateKeyError, StaleRowError, ValidationError
from ..database.transaction import TransactionManager
from ..reports.service import ReportService
from .model import Employee
from .password_policy import PasswordPolicy
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository, passwords: PasswordPolicy):
        self._employees = employees
        self._passwords = passwords

    def authenticate(self, code: str, password: str) -> Employee:
        employee = self._employees.find_by_code(code)
        if not employee or not self._passwords.verify(password, employee.password_hash):
            logger.info("Login failed for %r", code)
            raise AuthenticationError("Incorrect employee code or password")
        return employee


class EmployeeService:
    """Use case: manage employee accounts (admin)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        passwords: PasswordPolicy,
        reports: ReportService,
        tx: TransactionManager,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._passwords = passwords
        self._reports = reports
        self._tx = tx
        self._clock = clock

    def find_all(self) -> list[Employee]:
        return list(self._employees.find_all())

    def find_by_code(self, code: str) -> Optional[Employee]:
        return self._employees.find_by_code(code)

    def _hash_checked(self, password: str) -> tuple[ErrorKind, str]:
        result = self._passwords.validate(password)
        if result is not ErrorKind.SUCCESS:
            return result, ""
        return result, self._passwords.hash(password)

    def create(self, employee: Employee, *, password: str) -> ErrorKind:
        if not password:
            raise ValidationError("Password is required when registering an employee")

        result, password_hash = self._hash_checked(password)
        if result is not ErrorKind.SUCCESS:
            logger.info("Password rejected for new employee %s: %s", employee.code, result.value)
            return result

        try:
            with self._tx.transaction():
                if self._employees.find_by_code(employee.code) is not None:
                    logger.info("Employee code %s already in use", employee.code)
                    return ErrorKind.DUPLICATE_CODE

                now = self._clock()
                self._employees.insert(
                    replace(employee, password_hash=password_hash, deleted=False, created_at=now, updated_at=now)
                )
        except DuplicateKeyError as e:
            logger.warning("Employee code %s rejected by store", employee.code)
            return e.kind

        logger.info("Employee %s created (%s)", employee.code, employee.role.value)
        return ErrorKind.SUCCESS

    def update(self, employee: Employee, *, password: str = "") -> ErrorKind:
        try:
            with self._tx.transaction():
                current = self._employees.find_by_code(employee.code)
                if current is None:
                    logger.info("Employee %s is already deleted", employee.code)
                    return ErrorKind.ALREADY_DELETED

                if password:
                    result, password_hash = self._hash_checked(password)
                    if result is not ErrorKind.SUCCESS:
                        logger.info("Password rejected for employee %s: %s", employee.code, result.value)
                        return result
                else:
                    password_hash = current.password_hash

                self._employees.save(
                    replace(
                        employee,
                        password_hash=password_hash,
                        deleted=False,
                        created_at=current.created_at,
                        updated_at=self._clock(),
                    )
                )
        except StaleRowError:
            logger.info("Employee %s was deleted before the update", employee.code)
            return ErrorKind.ALREADY_DELETED

        logger.info("Employee %s updated", employee.code)
        return ErrorKind.SUCCESS

    def delete(self, code: str, acting_code: str) -> ErrorKind:
        if code == acting_code:
            logger.info("Employee %s tried to delete their own account", acting_code)
            return ErrorKind.SELF_DELETION

        try:
            with self._tx.transaction():
                employee = self._employees.find_by_code(code)
                if employee is None:
                    # Deleted in the meantime; nothing to do.
                    return ErrorKind.SUCCESS

                reports = self._reports.find_by_employee(employee)
                for report in reports:
                    self._reports.soft_delete(report.id)

                self._employees.save(replace(employee, deleted=True, updated_at=self._clock()))
        except StaleRowError:
            logger.info("Employee %s was deleted concurrently", code)
            return ErrorKind.SUCCESS

        logger.info("Employee %s deleted by %s (%d reports)", code, acting_code, len(reports))
        return ErrorKind.SUCCESS
