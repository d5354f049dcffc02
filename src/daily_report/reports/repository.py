from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Report


class ReportRepository(Protocol):
    """Every read excludes soft-deleted reports."""

    def find_by_id(self, report_id: int) -> Optional[Report]:
        raise NotImplementedError

    def find_all_ordered_by_date_desc_code_asc(self) -> Sequence[Report]:
        raise NotImplementedError

    def find_by_employee_code_and_date(self, code: str, report_date: date) -> Sequence[Report]:
        raise NotImplementedError

    def find_by_employee_code_and_date_excluding_id(
        self, code: str, report_date: date, report_id: int
    ) -> Sequence[Report]:
        raise NotImplementedError

    def save(self, report: Report) -> Report:
        """Insert when ``report.id`` is None, otherwise update the active row.

        Returns the stored report (with its generated id on insert). A second
        active report for the same employee and date raises
        DuplicateKeyError(ErrorKind.DUPLICATE_REPORT). Updating a row that is
        no longer active raises StaleRowError.
        """

        raise NotImplementedError
