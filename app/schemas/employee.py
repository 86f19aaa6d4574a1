from pydantic import BaseModel, ConfigDict
from typing import Optional, Union

# Monetary cells arrive from the spreadsheet unsanitized; the calculator
# coerces them, so the model keeps whatever the directory handed over.
RawAmount = Optional[Union[int, float, str]]

class Employee(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    employee_id: str
    name: str = ""
    designation: str = "N/A"
    department: str = "N/A"
    email: str = ""
    phone: str = ""
    date_of_joining: str = ""

    basic_salary: RawAmount = 0
    provident_fund: RawAmount = None
    esi: RawAmount = None
    other_deductions: RawAmount = None

    bank_name: str = ""
    account_number: str = ""
    ifsc_code: str = ""

    @property
    def display_name(self) -> str:
        return self.name.strip() or "Unknown"
