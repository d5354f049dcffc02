from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ErrorKind
from ..core.exceptions import StaleRowError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Report
from .repository import ReportRepository

_COLUMNS = "id, report_date, title, content, employee_code, delete_flg, created_at, updated_at"


def _to_report(row: Dict[str, Any]) -> Report:
    return Report(
        id=int(row["id"]),
        report_date=row["report_date"],
        title=row["title"],
        content=row["content"],
        employee_code=row["employee_code"],
        deleted=bool(row["delete_flg"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_id(self, report_id: int) -> Optional[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM reports WHERE id=%s AND delete_flg=0",
                (int(report_id),),
            )
            row = fetchone(cur)
            return _to_report(row) if row else None

    def find_all_ordered_by_date_desc_code_asc(self) -> Sequence[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM reports
                WHERE delete_flg=0
                ORDER BY report_date DESC, employee_code ASC
                """
            )
            return [_to_report(r) for r in fetchall(cur)]

    def find_by_employee_code_and_date(self, code: str, report_date: date) -> Sequence[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM reports
                WHERE employee_code=%s AND report_date=%s AND delete_flg=0
                """,
                (code, report_date),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def find_by_employee_code_and_date_excluding_id(
        self, code: str, report_date: date, report_id: int
    ) -> Sequence[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM reports
                WHERE employee_code=%s AND report_date=%s AND id<>%s AND delete_flg=0
                """,
                (code, report_date, int(report_id)),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def save(self, report: Report) -> Report:
        with db_cursor(self._conn_factory, duplicate_kind=ErrorKind.DUPLICATE_REPORT) as (_, cur):
            if report.id is None:
                cur.execute(
                    """
                    INSERT INTO reports(report_date, title, content, employee_code, delete_flg, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        report.report_date,
                        report.title,
                        report.content,
                        report.employee_code,
                        int(report.deleted),
                        report.created_at,
                        report.updated_at,
                    ),
                )
                return replace(report, id=int(cur.lastrowid))

            # employee_code and created_at are never rewritten.
            cur.execute(
                """
                UPDATE reports
                SET report_date=%s, title=%s, content=%s, delete_flg=%s, updated_at=%s
                WHERE id=%s AND delete_flg=0
                """,
                (
                    report.report_date,
                    report.title,
                    report.content,
                    int(report.deleted),
                    report.updated_at,
                    int(report.id),
                ),
            )
            if cur.rowcount == 0:
                raise StaleRowError(f"Report {report.id} is no longer active")
            return report
