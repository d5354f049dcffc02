from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import ErrorKind
from ..core.exceptions import DuplicateKeyError, StaleRowError
from ..database.memory import InMemoryDatabase
from .model import Report
from .repository import ReportRepository


class InMemoryReportRepository(ReportRepository):
    """ReportRepository over InMemoryDatabase.

    Emulates the unique key on (employee_code, report_date) for active rows.
    """

    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def _active(self) -> list[Report]:
        return [r for r in self._db.reports.values() if not r.deleted]

    def find_by_id(self, report_id: int) -> Optional[Report]:
        with self._db.lock:
            report = self._db.reports.get(int(report_id))
            if report is None or report.deleted:
                return None
            return report

    def find_all_ordered_by_date_desc_code_asc(self) -> Sequence[Report]:
        with self._db.lock:
            items = self._active()
        # Two stable passes: secondary key first, then primary.
        items.sort(key=lambda r: r.employee_code)
        items.sort(key=lambda r: r.report_date, reverse=True)
        return items

    def find_by_employee_code_and_date(self, code: str, report_date: date) -> Sequence[Report]:
        with self._db.lock:
            return [r for r in self._active() if r.employee_code == code and r.report_date == report_date]

    def find_by_employee_code_and_date_excluding_id(
        self, code: str, report_date: date, report_id: int
    ) -> Sequence[Report]:
        return [r for r in self.find_by_employee_code_and_date(code, report_date) if r.id != report_id]

    def save(self, report: Report) -> Report:
        with self._db.lock:
            if report.id is None:
                if not report.deleted and self.find_by_employee_code_and_date(report.employee_code, report.report_date):
                    raise DuplicateKeyError(ErrorKind.DUPLICATE_REPORT)
                report = replace(report, id=self._db.next_report_id())
                self._db.reports[report.id] = report
                return report

            current = self._db.reports.get(report.id)
            if current is None or current.deleted:
                raise StaleRowError(f"Report {report.id} is no longer active")
            if not report.deleted and self.find_by_employee_code_and_date_excluding_id(
                current.employee_code, report.report_date, report.id
            ):
                raise DuplicateKeyError(ErrorKind.DUPLICATE_REPORT)
            stored = replace(report, employee_code=current.employee_code, created_at=current.created_at)
            self._db.reports[report.id] = stored
            return stored
