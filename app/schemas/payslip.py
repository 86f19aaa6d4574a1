from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from app.core.config import settings

class PeriodConfig(BaseModel):
    month: str = Field(..., description="Pay period label, e.g. 'March'")
    year: int
    working_days: int = Field(default=settings.default_working_days, ge=1)
    actual_working_days: int = Field(default=settings.default_working_days, ge=0)

    @field_validator("month")
    @classmethod
    def month_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Month is required")
        return v

class PayslipRequest(PeriodConfig):
    employee_id: str = Field(..., min_length=1)

    def period(self) -> PeriodConfig:
        return PeriodConfig(**self.model_dump(exclude={"employee_id"}))

class BatchPayslipRequest(PeriodConfig):
    employee_ids: List[str] = Field(default_factory=list)

    def period(self) -> PeriodConfig:
        return PeriodConfig(**self.model_dump(exclude={"employee_ids"}))

class AmountInWordsRequest(BaseModel):
    amount: float

class PayslipEmployee(BaseModel):
    """Employee snapshot embedded in a payslip, amounts in whole rupees."""
    model_config = ConfigDict(frozen=True)

    id: str
    employee_id: str
    name: str
    designation: str
    department: str
    email: str
    phone: str
    date_of_joining: str
    basic_salary: int
    provident_fund: int
    esi: int
    other_deductions: int
    bank_name: str
    account_number: str
    ifsc_code: str

class Payslip(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee: PayslipEmployee
    month: str
    year: int
    working_days: int
    actual_working_days: int
    gross_earnings: int
    total_deductions: int
    net_salary: int
    generated_date: str

class PayslipFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: str
    employee_name: str
    error_kind: str
    message: str

    @property
    def display(self) -> str:
        return f"{self.employee_name} ({self.error_kind}: {self.message})"

class BatchSummary(BaseModel):
    total_gross_earnings: int = 0
    total_deductions: int = 0
    total_net_salary: int = 0

class BatchResult(BaseModel):
    payslips: List[Payslip]
    failures: List[PayslipFailure]
    requested: int
    summary: BatchSummary

    @property
    def succeeded(self) -> int:
        return len(self.payslips)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def failed_employees(self) -> Optional[List[str]]:
        return [f.display for f in self.failures] or None
