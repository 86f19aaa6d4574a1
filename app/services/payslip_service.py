"""
Payslip Service Layer

Business logic between the HTTP routers and the calculator/renderer.

Architecture:
- Router -> Service (this module) -> Directory / Calculator / Renderer
- Caller-level validation (missing period, bad employee data) lives here;
  the calculator itself only guards against non-finite results.
- Batches tolerate partial failure: one bad row never aborts the rest.
"""

import io
import logging
import zipfile
from typing import List, Optional, Sequence

from app.core.exceptions import (
    AppException,
    BatchFailedError,
    EmployeeNotFoundError,
    ValidationError,
)
from app.schemas.employee import Employee
from app.schemas.payslip import (
    BatchResult,
    BatchSummary,
    Payslip,
    PayslipFailure,
    PeriodConfig,
)
from app.services.employee_directory import EmployeeDirectory
from app.services.money import parse_amount
from app.services.payslip_calculator import calculate_payslip
from app.services.payslip_renderer import payslip_filename, render_payslip_html

logger = logging.getLogger(__name__)


def validate_employee(employee: Employee) -> None:
    """
    Check an employee record before calculating a payslip.

    Raises:
        ValidationError: Missing name or a basic salary that is not a
            positive number.
    """
    errors = []

    if not employee.name or not employee.name.strip():
        errors.append("Missing employee name")

    basic_salary = parse_amount(employee.basic_salary)
    if basic_salary is None or basic_salary <= 0:
        errors.append(f"Invalid basic salary: {employee.basic_salary}")

    if errors:
        raise ValidationError(
            f"Employee {employee.display_name} validation failed: {', '.join(errors)}",
            details={"employee_id": employee.employee_id, "errors": errors}
        )


def _calculate(employee: Employee, period: PeriodConfig) -> Payslip:
    return calculate_payslip(
        employee,
        period.month,
        period.year,
        period.working_days,
        period.actual_working_days,
    )


def generate_payslip(
    directory: EmployeeDirectory,
    employee_id: str,
    period: PeriodConfig
) -> Payslip:
    """
    Calculate a single employee's payslip.

    Errors propagate to the caller; there is no partial-success mode here.
    """
    employee = directory.get_employee(employee_id)
    return _calculate(employee, period)


def select_employees(
    directory: EmployeeDirectory,
    employee_ids: Optional[Sequence[str]],
    require_ids: bool = False
) -> List[Employee]:
    """
    Resolve the employees a batch should cover.

    An empty ``employee_ids`` means "everyone" unless ``require_ids`` is set.
    """
    if not employee_ids:
        if require_ids:
            raise ValidationError("Employee IDs array, month, and year are required")
        employees = directory.list_employees()
        if not employees:
            raise EmployeeNotFoundError("No employees found in the spreadsheet")
        return employees

    employees = directory.find_employees(employee_ids)
    if not employees:
        raise EmployeeNotFoundError("No matching employees found for the provided IDs")
    return employees


def summarize(payslips: Sequence[Payslip]) -> BatchSummary:
    return BatchSummary(
        total_gross_earnings=sum(p.gross_earnings for p in payslips),
        total_deductions=sum(p.total_deductions for p in payslips),
        total_net_salary=sum(p.net_salary for p in payslips),
    )


def generate_batch(employees: Sequence[Employee], period: PeriodConfig) -> BatchResult:
    """
    Calculate payslips for many employees independently.

    Output order follows input order. Each failure is recorded as
    "<name> (<ErrorKind>: <message>)".

    Raises:
        BatchFailedError: Every employee failed.
    """
    payslips: List[Payslip] = []
    failures: List[PayslipFailure] = []

    for employee in employees:
        try:
            validate_employee(employee)
            payslips.append(_calculate(employee, period))
        except Exception as e:
            message = e.message if isinstance(e, AppException) else str(e)
            failure = PayslipFailure(
                employee_id=employee.employee_id,
                employee_name=employee.display_name,
                error_kind=type(e).__name__,
                message=message,
            )
            logger.error(
                f"Failed to generate payslip for employee {employee.display_name}: {message}",
                extra={
                    "employee_id": employee.employee_id,
                    "basic_salary": str(employee.basic_salary),
                    "provident_fund": str(employee.provident_fund),
                    "esi": str(employee.esi),
                    "other_deductions": str(employee.other_deductions),
                }
            )
            failures.append(failure)

    if employees and not payslips:
        raise BatchFailedError([f.display for f in failures])

    logger.info(
        f"Generated {len(payslips)}/{len(employees)} payslips for {period.month} {period.year}",
        extra={"failed": len(failures)}
    )

    return BatchResult(
        payslips=payslips,
        failures=failures,
        requested=len(employees),
        summary=summarize(payslips),
    )


def build_payslips_zip(payslips: Sequence[Payslip]) -> bytes:
    """
    Package individual HTML payslips into a ZIP archive.

    Returns:
        bytes: ZIP file content (empty bytes when there is nothing to pack)
    """
    if not payslips:
        return b""

    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
        used_names = set()
        for payslip in payslips:
            filename = payslip_filename(payslip)
            # Synthesized IDs can repeat across ranges; keep every entry
            if filename in used_names:
                filename = filename.replace(".html", f"-{payslip.employee.id}.html")
            used_names.add(filename)
            zip_file.writestr(filename, render_payslip_html(payslip))

    return zip_buffer.getvalue()
