"""
Employees Router

Read-only view of the employee directory backed by Google Sheets.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.schemas import ApiResponse
from app.dependencies import get_directory
from app.services.employee_directory import EmployeeDirectory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("")
def list_employees(
    range_: Optional[str] = Query(None, alias="range", description="A1 range, e.g. Sheet1!A2:Z"),
    directory: EmployeeDirectory = Depends(get_directory)
):
    """
    List employees from the configured spreadsheet.
    """
    employees = directory.list_employees(range_)
    return ApiResponse.ok(
        [e.model_dump() for e in employees],
        count=len(employees),
        spreadsheet_id=directory.masked_spreadsheet_id,
    ).to_dict()


@router.post("/refresh")
def refresh_employees(directory: EmployeeDirectory = Depends(get_directory)):
    """
    Drop cached employee data so the next request reads the live sheet.
    """
    directory.invalidate()
    logger.info("Employee directory cache cleared")
    return {"success": True, "message": "Employee cache cleared"}
