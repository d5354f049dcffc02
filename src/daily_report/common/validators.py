from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..core.constants import (
    EMPLOYEE_CODE_MAX_LENGTH,
    EMPLOYEE_NAME_MAX_LENGTH,
    REPORT_CONTENT_MAX_LENGTH,
    REPORT_TITLE_MAX_LENGTH,
)
from ..core.exceptions import ValidationError

if TYPE_CHECKING:
    from ..employees.model import Employee
    from ..reports.model import Report


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value:
        raise ValidationError(f"{field_name} is required")
    return value


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def validate_employee_fields(employee: "Employee") -> None:
    """Structural checks the caller runs before EmployeeService.create/update."""
    require_max_length(require_non_empty(employee.code, "Code"), "Code", EMPLOYEE_CODE_MAX_LENGTH)
    require_max_length(require_non_empty(employee.name, "Name"), "Name", EMPLOYEE_NAME_MAX_LENGTH)


def validate_report_fields(report: "Report") -> None:
    """Structural checks the caller runs before ReportService.create/update."""
    if report.report_date is None:
        raise ValidationError("Date is required")
    require_non_empty(report.employee_code, "Employee")
    require_max_length(require_non_empty(report.title, "Title"), "Title", REPORT_TITLE_MAX_LENGTH)
    require_max_length(require_non_empty(report.content, "Content"), "Content", REPORT_CONTENT_MAX_LENGTH)
