"""
Employee Directory

Reads employee rows from the configured Google Sheet and maps them to
Employee records. The sheet has no stable identifier column, so employee IDs
are synthesized from the name and row position (e.g. "RAV001"). They are
unique within one range but shift when rows are inserted or removed above,
and are never deduplicated across ranges.

Results are cached per range for ``cache_ttl_seconds`` to keep bulk runs
from hammering the Sheets API.
"""
import logging
import re
import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from app.core.exceptions import (
    DirectoryAccessError,
    DirectoryError,
    DirectoryNotConfiguredError,
    EmployeeNotFoundError,
)
from app.schemas.employee import Employee
from app.services.money import parse_or_default

logger = logging.getLogger(__name__)

# Fixed column layout of the payroll sheet
COL_NAME = 0
COL_DESIGNATION = 1
COL_EMAIL = 2
COL_PHONE = 3
COL_DATE_OF_JOINING = 4
COL_BASIC_SALARY = 5
COL_ESI = 6
COL_PROVIDENT_FUND = 7
COL_BANK_NAME = 8
COL_ACCOUNT_NUMBER = 9
COL_IFSC = 10

DEFAULT_RANGE = "Sheet1!A2:Z"


def _cell(row: List[Any], index: int) -> str:
    if index < len(row) and row[index] is not None:
        return str(row[index]).strip()
    return ""


def synthesize_employee_id(name: str, index: int) -> str:
    """
    Build an ID from the first three letters of the name and the 1-based row
    number: "Ravi Kumar", 0 -> "RAV001"; "Al", 4 -> "ALX005"; "" -> "UNK00n".
    """
    prefix = "UNK"
    letters = re.sub(r"[^a-zA-Z]", "", name or "")
    if letters:
        prefix = letters[:3].upper().ljust(3, "X")
    return f"{prefix}{index + 1:03d}"


def row_to_employee(row: List[Any], index: int) -> Employee:
    name = _cell(row, COL_NAME)
    return Employee(
        id=str(index + 1),
        employee_id=synthesize_employee_id(name, index),
        name=name or f"Employee {index + 1}",
        designation=_cell(row, COL_DESIGNATION) or "N/A",
        department="N/A",
        email=_cell(row, COL_EMAIL),
        phone=_cell(row, COL_PHONE),
        date_of_joining=_cell(row, COL_DATE_OF_JOINING),
        basic_salary=parse_or_default(_cell(row, COL_BASIC_SALARY)),
        esi=parse_or_default(_cell(row, COL_ESI)),
        provident_fund=parse_or_default(_cell(row, COL_PROVIDENT_FUND)),
        other_deductions=0.0,
        bank_name=_cell(row, COL_BANK_NAME),
        account_number=_cell(row, COL_ACCOUNT_NUMBER),
        ifsc_code=_cell(row, COL_IFSC),
    )


def header_range_for(range_: str) -> str:
    """'Sheet1!A2:Z' -> 'Sheet1!A1:Z1'"""
    if "!" in range_:
        sheet, _ = range_.split("!", 1)
        return f"{sheet}!A1:Z1"
    return "A1:Z1"


class EmployeeDirectory:
    def __init__(
        self,
        client,
        spreadsheet_id: Optional[str],
        default_range: str = DEFAULT_RANGE,
        cache_ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.spreadsheet_id = spreadsheet_id
        self.default_range = default_range
        self.cache_ttl_seconds = cache_ttl_seconds
        self._clock = clock
        self._cache: Dict[str, Tuple[float, List[Employee]]] = {}
        self._lock = threading.Lock()

    @property
    def masked_spreadsheet_id(self) -> str:
        if not self.spreadsheet_id:
            return ""
        return self.spreadsheet_id[:10] + "..."

    def _require_sheet(self) -> str:
        if not self.spreadsheet_id:
            raise DirectoryNotConfiguredError()
        return self.spreadsheet_id

    def _cached(self, range_: str) -> Optional[List[Employee]]:
        if self.cache_ttl_seconds <= 0:
            return None
        with self._lock:
            entry = self._cache.get(range_)
            if entry is None:
                return None
            fetched_at, employees = entry
            if self._clock() - fetched_at > self.cache_ttl_seconds:
                del self._cache[range_]
                return None
            return employees

    def _log_headers(self, sheet_id: str, range_: str) -> None:
        try:
            header_rows = self.client.get_values(sheet_id, header_range_for(range_))
        except (DirectoryError, DirectoryAccessError) as e:
            logger.warning(f"Could not read sheet headers: {e.message}")
            return
        headers = header_rows[0] if header_rows else []
        logger.info("Sheet headers found", extra={"headers": headers})

    def list_employees(self, range_: Optional[str] = None) -> List[Employee]:
        """
        Fetch all employees in ``range_`` (defaults to the configured range).

        Raises:
            DirectoryNotConfiguredError: No spreadsheet ID configured.
            DirectoryAccessError: The sheet is not readable with our credentials.
            DirectoryError: The Sheets API failed after retries.
        """
        range_ = range_ or self.default_range
        sheet_id = self._require_sheet()

        cached = self._cached(range_)
        if cached is not None:
            logger.debug(f"Serving {len(cached)} employees from cache")
            return list(cached)

        rows = self.client.get_values(sheet_id, range_)
        if rows:
            self._log_headers(sheet_id, range_)
        employees = [row_to_employee(row, index) for index, row in enumerate(rows)]
        logger.info(f"Fetched {len(employees)} employees from Google Sheets")

        if self.cache_ttl_seconds > 0:
            with self._lock:
                self._cache[range_] = (self._clock(), employees)
        return list(employees)

    def get_employee(self, employee_id: str) -> Employee:
        for employee in self.list_employees():
            if employee.employee_id == employee_id:
                return employee
        raise EmployeeNotFoundError()

    def find_employees(self, employee_ids: Iterable[str]) -> List[Employee]:
        """Every employee whose ID was requested, in sheet order."""
        wanted = set(employee_ids)
        return [e for e in self.list_employees() if e.employee_id in wanted]

    def validate_access(self) -> bool:
        try:
            self.client.get_spreadsheet(self._require_sheet())
            return True
        except (DirectoryError, DirectoryAccessError) as e:
            logger.error(f"Error validating sheet access: {e.message}")
            return False

    def invalidate(self) -> None:
        with self._lock:
            self._cache.clear()
