from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import ErrorKind
from ..core.exceptions import DuplicateKeyError, StaleRowError
from ..database.transaction import TransactionManager
from ..employees.model import Employee
from .model import Report
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class ReportService:
    """Use case: register, edit and soft-delete daily reports.

    One active report per employee per date. Each check-then-write runs in a
    single transaction; the store's unique key catches whatever slips past
    the check under concurrency.
    """

    def __init__(
        self,
        reports: ReportRepository,
        tx: TransactionManager,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._reports = reports
        self._tx = tx
        self._clock = clock

    def find_all(self) -> list[Report]:
        return list(self._reports.find_all_ordered_by_date_desc_code_asc())

    def find_by_id(self, report_id: int) -> Optional[Report]:
        return self._reports.find_by_id(report_id)

    def find_by_employee(self, employee: Employee) -> list[Report]:
        return [r for r in self.find_all() if r.employee_code == employee.code]

    def list_visible_to(self, viewer: Employee) -> list[Report]:
        """Admins see every report, general employees only their own."""
        if viewer.is_admin:
            return self.find_all()
        return self.find_by_employee(viewer)

    def create(self, report: Report) -> ErrorKind:
        try:
            with self._tx.transaction():
                if self._reports.find_by_employee_code_and_date(report.employee_code, report.report_date):
                    logger.info("Report for %s on %s already exists", report.employee_code, report.report_date)
                    return ErrorKind.DUPLICATE_REPORT

                now = self._clock()
                saved = self._reports.save(
                    replace(report, id=None, deleted=False, created_at=now, updated_at=now)
                )
        except DuplicateKeyError as e:
            logger.warning("Concurrent report for %s on %s rejected by store", report.employee_code, report.report_date)
            return e.kind

        logger.info("Report %s created for %s on %s", saved.id, saved.employee_code, saved.report_date)
        return ErrorKind.SUCCESS

    def update(self, report: Report) -> ErrorKind:
        try:
            with self._tx.transaction():
                if self._reports.find_by_employee_code_and_date_excluding_id(
                    report.employee_code, report.report_date, report.id
                ):
                    logger.info("Another report for %s on %s already exists", report.employee_code, report.report_date)
                    return ErrorKind.DUPLICATE_REPORT

                current = self._reports.find_by_id(report.id)
                if current is None:
                    logger.info("Report %s is already deleted", report.id)
                    return ErrorKind.ALREADY_DELETED

                self._reports.save(
                    replace(
                        current,
                        report_date=report.report_date,
                        title=report.title,
                        content=report.content,
                        updated_at=self._clock(),
                    )
                )
        except DuplicateKeyError as e:
            logger.warning("Concurrent report for %s on %s rejected by store", report.employee_code, report.report_date)
            return e.kind
        except StaleRowError:
            logger.info("Report %s was deleted before the update", report.id)
            return ErrorKind.ALREADY_DELETED

        logger.info("Report %s updated", report.id)
        return ErrorKind.SUCCESS

    def soft_delete(self, report_id: int) -> None:
        try:
            with self._tx.transaction():
                report = self._reports.find_by_id(report_id)
                if report is None:
                    # Deleted in the meantime; nothing to do.
                    return
                self._reports.save(replace(report, deleted=True, updated_at=self._clock()))
        except StaleRowError:
            logger.info("Report %s was deleted concurrently", report_id)
            return
        logger.info("Report %s deleted", report_id)
