from __future__ import annotations

from datetime import date

import pytest

from daily_report.common.validators import validate_employee_fields, validate_report_fields
from daily_report.core.enums import Role
from daily_report.core.exceptions import ValidationError
from daily_report.employees.model import Employee
from daily_report.reports.model import Report


def test_employee_fields_within_limits():
    validate_employee_fields(Employee(code="A" * 10, name="N" * 20, role=Role.GENERAL))


@pytest.mark.parametrize(
    "code, name",
    [("", "Taro"), ("A" * 11, "Taro"), ("E001", ""), ("E001", "N" * 21)],
)
def test_employee_fields_rejected(code, name):
    with pytest.raises(ValidationError):
        validate_employee_fields(Employee(code=code, name=name, role=Role.GENERAL))


def test_report_fields_within_limits():
    validate_report_fields(
        Report(id=None, report_date=date(2026, 2, 2), title="T" * 100, content="C" * 600, employee_code="E001")
    )


@pytest.mark.parametrize(
    "report_date, title, content",
    [
        (None, "Title", "Content"),
        (date(2026, 2, 2), "", "Content"),
        (date(2026, 2, 2), "T" * 101, "Content"),
        (date(2026, 2, 2), "Title", ""),
        (date(2026, 2, 2), "Title", "C" * 601),
    ],
)
def test_report_fields_rejected(report_date, title, content):
    with pytest.raises(ValidationError):
        validate_report_fields(
            Report(id=None, report_date=report_date, title=title, content=content, employee_code="E001")
        )


def test_whitespace_only_values_count_as_present():
    validate_employee_fields(Employee(code="E001", name="   ", role=Role.GENERAL))
    validate_report_fields(Report(id=None, report_date=date(2026, 2, 2), title=" ", content="\n", employee_code="E001"))
