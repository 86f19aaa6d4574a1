"""
Payslip Calculator

Turns one employee record and a pay period into an immutable Payslip.

Rules (current rule set):
- Gross earnings are the basic salary alone.
- Deductions are provident fund + ESI + other deductions.
- Net salary = gross - deductions; a negative net is reported, not clamped.
- Salary is NOT pro-rated by working days; the day counts are carried
  through for display. Pro-ration lives behind ``salary_ratio``.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from app.core.exceptions import CalculationError
from app.schemas.employee import Employee
from app.schemas.payslip import Payslip, PayslipEmployee
from app.services.money import parse_or_default, round_half_up

logger = logging.getLogger(__name__)

GENERATED_DATE_FORMAT = "%d/%m/%Y"

RatioPolicy = Callable[[int, int], float]


def flat_ratio(working_days: int, actual_working_days: int) -> float:
    """Full monthly salary regardless of days worked."""
    return 1.0


def worked_days_ratio(working_days: int, actual_working_days: int) -> float:
    """Earlier rule: scale pay by actual / nominal working days."""
    return actual_working_days / max(working_days, 1)


# Swap to worked_days_ratio to re-enable pro-rating
salary_ratio: RatioPolicy = flat_ratio


@dataclass(frozen=True)
class Compensation:
    basic_salary: float
    provident_fund: float
    esi: float
    other_deductions: float

    @classmethod
    def from_employee(cls, employee: Employee) -> "Compensation":
        return cls(
            basic_salary=parse_or_default(employee.basic_salary),
            provident_fund=parse_or_default(employee.provident_fund),
            esi=parse_or_default(employee.esi),
            other_deductions=parse_or_default(employee.other_deductions),
        )

    def scaled(self, ratio: float) -> "Compensation":
        return Compensation(
            basic_salary=self.basic_salary * ratio,
            provident_fund=self.provident_fund * ratio,
            esi=self.esi * ratio,
            other_deductions=self.other_deductions * ratio,
        )

    def rounded(self) -> "Compensation":
        return Compensation(
            basic_salary=round_half_up(self.basic_salary),
            provident_fund=round_half_up(self.provident_fund),
            esi=round_half_up(self.esi),
            other_deductions=round_half_up(self.other_deductions),
        )


def _clamp_days(value: Any, minimum: int) -> int:
    return max(int(parse_or_default(value, float(minimum))), minimum)


def calculate_payslip(
    employee: Employee,
    month: str,
    year: int,
    working_days: int = 30,
    actual_working_days: int = 30,
    ratio_policy: Optional[RatioPolicy] = None,
) -> Payslip:
    """
    Calculate a payslip for one employee.

    Args:
        employee: Source record; monetary fields may be unsanitized.
        month: Pay period label, passed through verbatim.
        year: Pay period year, passed through verbatim.
        working_days: Nominal days in the period (clamped to >= 1).
        actual_working_days: Days worked (clamped to >= 0).
        ratio_policy: Pro-ration policy; defaults to ``salary_ratio``.

    Returns:
        Payslip with every amount rounded to whole rupees.

    Raises:
        CalculationError: If gross, deductions or net is not finite.
    """
    working_days = _clamp_days(working_days, 1)
    actual_working_days = _clamp_days(actual_working_days, 0)
    policy = ratio_policy or salary_ratio

    amounts = Compensation.from_employee(employee).scaled(
        policy(working_days, actual_working_days)
    )

    # Deductions are rounded as one sum, not line by line
    gross_earnings = round_half_up(amounts.basic_salary)
    total_deductions = round_half_up(amounts.provident_fund + amounts.esi + amounts.other_deductions)
    net_salary = gross_earnings - total_deductions

    for label, value in (
        ("gross earnings", gross_earnings),
        ("total deductions", total_deductions),
        ("net salary", net_salary),
    ):
        if not math.isfinite(value):
            raise CalculationError(
                f"Invalid {label} calculation for {employee.display_name}: {value}",
                details={
                    "employee_id": employee.employee_id,
                    "gross_earnings": str(gross_earnings),
                    "total_deductions": str(total_deductions),
                },
            )

    if net_salary < 0:
        logger.warning(
            f"Negative net salary for {employee.display_name}: {net_salary:.0f}",
            extra={"employee_id": employee.employee_id},
        )

    lines = amounts.rounded()
    snapshot = PayslipEmployee(
        **employee.model_dump(
            exclude={"basic_salary", "provident_fund", "esi", "other_deductions"}
        ),
        basic_salary=int(lines.basic_salary),
        provident_fund=int(lines.provident_fund),
        esi=int(lines.esi),
        other_deductions=int(lines.other_deductions),
    )

    return Payslip(
        employee=snapshot,
        month=month,
        year=year,
        working_days=working_days,
        actual_working_days=actual_working_days,
        gross_earnings=int(gross_earnings),
        total_deductions=int(total_deductions),
        net_salary=int(net_salary),
        generated_date=datetime.now().strftime(GENERATED_DATE_FORMAT),
    )
