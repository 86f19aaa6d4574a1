import pytest
import os

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DEFAULT_SPREADSHEET_ID"] = "test-sheet-0123456789abcdef"
os.environ["COMPANY_NAME"] = "Green Valley School"
os.environ["COMPANY_ADDRESS"] = "12 Lake Road, Pune"
os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"
os.environ["EMPLOYEE_CACHE_TTL_SECONDS"] = "60"

from app.core.exceptions import DirectoryAccessError
from app.dependencies import get_directory
from app.main import app
from app.schemas.employee import Employee
from app.services.employee_directory import EmployeeDirectory
from fastapi.testclient import TestClient

SPREADSHEET_ID = os.environ["DEFAULT_SPREADSHEET_ID"]

HEADERS = ["Name", "Designation", "Email", "Phone", "Date of Joining",
           "Basic", "ESI", "PF", "Bank", "Account", "IFSC"]

# Name, Designation, Email, Phone, DOJ, Basic, ESI, PF, Bank, Account, IFSC
SHEET_ROWS = [
    ["Ravi Kumar", "Teacher", "ravi@school.in", "9876543210", "01/06/2019",
     "30000", "200", "1800", "State Bank of India", "123456789", "SBIN0001234"],
    ["Meena", "Clerk", "meena@school.in", "", "15/07/2021", "18,500", "150"],
    ["Al", "Peon", "", "", "", "abc"],
    ["", "Driver", "", "", "", "12000", "90", "1440"],
]


class FakeSheetsClient:
    """In-memory stand-in for GoogleSheetsClient."""

    def __init__(self, rows=None, accessible=True):
        self.rows = SHEET_ROWS if rows is None else rows
        self.accessible = accessible
        self.values_calls = 0
        self.calls = 0

    def get_values(self, spreadsheet_id, range_):
        self.calls += 1
        if not self.accessible:
            raise DirectoryAccessError()
        if range_.endswith("A1:Z1"):
            return [list(HEADERS)]
        self.values_calls += 1
        return [list(row) for row in self.rows]

    def get_spreadsheet(self, spreadsheet_id):
        self.calls += 1
        if not self.accessible:
            raise DirectoryAccessError()
        return {"spreadsheetId": spreadsheet_id, "properties": {"title": "Payroll"}}


@pytest.fixture(scope="function")
def sheets_client():
    return FakeSheetsClient()


@pytest.fixture(scope="function")
def directory(sheets_client):
    """Directory over the in-memory sheet, caching enabled."""
    return EmployeeDirectory(sheets_client, SPREADSHEET_ID, cache_ttl_seconds=60)


@pytest.fixture(scope="function")
def make_directory():
    """Factory for directories over custom rows or an unreachable sheet."""
    def _make_directory(rows=None, accessible=True, spreadsheet_id=SPREADSHEET_ID, **kwargs):
        client = FakeSheetsClient(rows=rows, accessible=accessible)
        return EmployeeDirectory(client, spreadsheet_id, **kwargs)
    return _make_directory


@pytest.fixture(scope="function")
def make_employee():
    """Factory for Employee records with sensible defaults."""
    def _make_employee(index=1, **overrides):
        fields = {
            "id": str(index),
            "employee_id": f"EMP{index:03d}",
            "name": f"Employee {index}",
            "designation": "Teacher",
            "basic_salary": 30000,
            "provident_fund": 1800,
            "esi": 200,
            "other_deductions": 0,
        }
        fields.update(overrides)
        return Employee(**fields)
    return _make_employee


@pytest.fixture(scope="function")
def client(directory):
    """Get a TestClient that reads employees from the in-memory sheet."""
    app.dependency_overrides[get_directory] = lambda: directory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
