"""Example: drive the service layer directly (no web layer).

Runs against the in-memory store unless APP_ENV selects MySQL settings.
Field checks run first, the way a form handler would before calling a service.
"""

from datetime import date

from daily_report.common.validators import validate_employee_fields, validate_report_fields
from daily_report.core.enums import ErrorKind, Role
from daily_report.core.exceptions import ValidationError
from daily_report.core.messages import error_message
from daily_report.employees.model import Employee
from daily_report.main import create_container
from daily_report.reports.model import Report


def _show(action: str, result: ErrorKind) -> None:
    print(f"{action}: {result.value}" + ("" if result.ok else f" ({error_message(result)})"))


def _register(employees, employee: Employee, password: str) -> None:
    try:
        validate_employee_fields(employee)
    except ValidationError as e:
        print(f"create {employee.code}: {e}")
        return
    _show(f"create {employee.code}", employees.create(employee, password=password))


def main():
    container = create_container("daily_report.config.testing")
    employees = container.employee_service
    reports = container.report_service

    _register(employees, Employee(code="A001", name="Boss", role=Role.ADMIN), "Admin123")
    _register(employees, Employee(code="E001", name="Taro", role=Role.GENERAL), "Taro1234")
    _register(employees, Employee(code="E002", name="Jiro", role=Role.GENERAL), "jiro")
    _register(employees, Employee(code="E003", name="", role=Role.GENERAL), "Hanako12")

    today = Report(id=None, report_date=date.today(), title="Stand-up", content="Reviewed PRs", employee_code="E001")
    validate_report_fields(today)
    _show("first report", reports.create(today))
    _show("second report same day", reports.create(today))

    admin = container.auth_service.authenticate("A001", "Admin123")
    for r in reports.list_visible_to(admin):
        print(f"  {r.report_date} {r.employee_code} {r.title}")

    _show("admin deletes self", employees.delete("A001", admin.code))
    _show("admin deletes taro", employees.delete("E001", admin.code))
    print(f"reports left: {len(reports.find_all())}")


if __name__ == "__main__":
    main()
