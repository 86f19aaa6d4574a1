import pytest

from app.core.exceptions import (
    DirectoryAccessError,
    DirectoryNotConfiguredError,
    EmployeeNotFoundError,
)
from app.services.employee_directory import (
    header_range_for,
    row_to_employee,
    synthesize_employee_id,
)

@pytest.mark.parametrize("name, index, expected", [
    ("Ravi Kumar", 0, "RAV001"),
    ("Al", 4, "ALX005"),
    ("", 9, "UNK010"),
    ("  ", 1, "UNK002"),
    ("123", 2, "UNK003"),
    ("o'neil", 11, "ONE012"),
])
def test_synthesize_employee_id(name, index, expected):
    assert synthesize_employee_id(name, index) == expected

def test_row_mapping_uses_fixed_columns():
    row = ["Ravi Kumar", "Teacher", "ravi@school.in", "9876543210", "01/06/2019",
           "30,000", "200", "1800", "SBI", "123456789", "SBIN0001234"]
    employee = row_to_employee(row, 0)

    assert employee.id == "1"
    assert employee.employee_id == "RAV001"
    assert employee.designation == "Teacher"
    assert employee.department == "N/A"
    assert employee.basic_salary == 30000.0
    assert employee.esi == 200.0
    assert employee.provident_fund == 1800.0
    assert employee.other_deductions == 0.0
    assert employee.ifsc_code == "SBIN0001234"

def test_short_row_gets_defaults():
    employee = row_to_employee(["", "", "", "", "", "lots"], 3)

    assert employee.name == "Employee 4"
    assert employee.employee_id == "UNK004"
    assert employee.designation == "N/A"
    assert employee.basic_salary == 0.0
    assert employee.provident_fund == 0.0
    assert employee.bank_name == ""

def test_header_range_for():
    assert header_range_for("Sheet1!A2:Z") == "Sheet1!A1:Z1"
    assert header_range_for("'Staff 2025'!B3:K") == "'Staff 2025'!A1:Z1"
    assert header_range_for("A2:Z") == "A1:Z1"

def test_list_employees(directory):
    employees = directory.list_employees()
    assert [e.employee_id for e in employees] == ["RAV001", "MEE002", "ALX003", "UNK004"]
    assert employees[1].basic_salary == 18500.0
    assert employees[1].provident_fund == 0.0

def test_list_is_cached_within_ttl(make_directory):
    now = [1000.0]
    directory = make_directory(cache_ttl_seconds=60, clock=lambda: now[0])

    directory.list_employees()
    now[0] += 30
    directory.list_employees()
    assert directory.client.values_calls == 1

    now[0] += 31
    directory.list_employees()
    assert directory.client.values_calls == 2

def test_cache_is_keyed_by_range(directory):
    directory.list_employees("Sheet1!A2:Z")
    directory.list_employees("Sheet2!A2:Z")
    assert directory.client.values_calls == 2

def test_zero_ttl_disables_cache(make_directory):
    directory = make_directory(cache_ttl_seconds=0)
    directory.list_employees()
    directory.list_employees()
    assert directory.client.values_calls == 2

def test_invalidate_forces_refetch(directory):
    directory.list_employees()
    directory.invalidate()
    directory.list_employees()
    assert directory.client.values_calls == 2

def test_callers_cannot_mutate_cache(directory):
    first = directory.list_employees()
    first.clear()
    assert len(directory.list_employees()) == 4

def test_get_employee(directory):
    employee = directory.get_employee("MEE002")
    assert employee.name == "Meena"

def test_get_employee_unknown_id(directory):
    with pytest.raises(EmployeeNotFoundError):
        directory.get_employee("ZZZ999")

def test_find_employees_keeps_sheet_order(directory):
    found = directory.find_employees(["UNK004", "RAV001", "NOPE"])
    assert [e.employee_id for e in found] == ["RAV001", "UNK004"]

def test_empty_sheet(make_directory):
    assert make_directory(rows=[]).list_employees() == []

def test_unconfigured_sheet(make_directory):
    directory = make_directory(spreadsheet_id=None)
    assert directory.masked_spreadsheet_id == ""
    with pytest.raises(DirectoryNotConfiguredError):
        directory.list_employees()
    with pytest.raises(DirectoryNotConfiguredError):
        directory.validate_access()

def test_inaccessible_sheet(make_directory):
    directory = make_directory(accessible=False)
    assert directory.validate_access() is False
    with pytest.raises(DirectoryAccessError):
        directory.list_employees()

def test_masked_spreadsheet_id(directory):
    assert directory.masked_spreadsheet_id == "test-sheet..."
