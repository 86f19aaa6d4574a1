"""
Payslips Router

Handles HTTP endpoints for payslip generation.
All business logic is delegated to the payslip service layer.
"""
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, Response
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.limiter import GENERATION_LIMIT, limiter
from app.core.schemas import ApiResponse
from app.dependencies import get_directory
from app.schemas.payslip import (
    AmountInWordsRequest,
    BatchPayslipRequest,
    PayslipRequest,
    PeriodConfig,
)
from app.services import payslip_service
from app.services.employee_directory import EmployeeDirectory
from app.services.number_words import to_words
from app.services.payslip_renderer import (
    payslip_filename,
    render_bulk_payslips_html,
    render_payslip_html,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payslips", tags=["payslips"])


@router.get("/generate")
def get_payslip(
    month: str = Query(..., min_length=1),
    year: int = Query(...),
    employee_id: str = Query(..., min_length=1),
    working_days: int = Query(settings.default_working_days, ge=1),
    actual_working_days: int = Query(settings.default_working_days, ge=0),
    directory: EmployeeDirectory = Depends(get_directory)
):
    """
    Calculate one employee's payslip and return it as JSON.
    """
    try:
        period = PeriodConfig(
            month=month,
            year=year,
            working_days=working_days,
            actual_working_days=actual_working_days,
        )
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors())
    payslip = payslip_service.generate_payslip(directory, employee_id, period)
    return ApiResponse.ok(payslip.model_dump()).to_dict()


@router.post("/generate")
@limiter.limit(GENERATION_LIMIT)
def generate_payslips(
    request: Request,
    payload: BatchPayslipRequest,
    directory: EmployeeDirectory = Depends(get_directory)
):
    """
    Calculate payslips for the selected employees (all when none selected).

    Partial failures are reported in ``failed_employees``; the call only
    fails when every employee fails.
    """
    employees = payslip_service.select_employees(directory, payload.employee_ids)
    result = payslip_service.generate_batch(employees, payload.period())

    return ApiResponse.ok(
        [p.model_dump() for p in result.payslips],
        count=result.succeeded,
        requested=result.requested,
        failed=result.failed,
        failed_employees=result.failed_employees,
        summary=result.summary.model_dump(),
    ).to_dict()


@router.post("/pdf", response_class=HTMLResponse)
@limiter.limit(GENERATION_LIMIT)
def payslip_document(
    request: Request,
    payload: PayslipRequest,
    directory: EmployeeDirectory = Depends(get_directory)
):
    """
    Render one payslip as printable HTML (print to PDF in the browser).
    """
    payslip = payslip_service.generate_payslip(directory, payload.employee_id, payload.period())
    return HTMLResponse(
        content=render_payslip_html(payslip),
        headers={"Content-Disposition": f'inline; filename="{payslip_filename(payslip)}"'}
    )


@router.post("/bulk-pdf", response_class=HTMLResponse)
@limiter.limit(GENERATION_LIMIT)
def bulk_payslip_document(
    request: Request,
    payload: BatchPayslipRequest,
    directory: EmployeeDirectory = Depends(get_directory)
):
    """
    Render payslips for the selected employees into one printable document.
    """
    employees = payslip_service.select_employees(directory, payload.employee_ids, require_ids=True)
    result = payslip_service.generate_batch(employees, payload.period())

    filename = f"payslips-{result.succeeded}-employees-{payload.month}-{payload.year}.html"
    return HTMLResponse(
        content=render_bulk_payslips_html(result.payslips),
        headers={
            "Content-Disposition": f'inline; filename="{filename}"',
            "X-Requested-Count": str(result.requested),
            "X-Generated-Count": str(result.succeeded),
            "X-Failed-Count": str(result.failed),
        }
    )


@router.post("/bulk-zip")
@limiter.limit(GENERATION_LIMIT)
def bulk_payslip_zip(
    request: Request,
    payload: BatchPayslipRequest,
    directory: EmployeeDirectory = Depends(get_directory)
):
    """
    Download one HTML payslip per selected employee as a ZIP archive.
    """
    employees = payslip_service.select_employees(directory, payload.employee_ids, require_ids=True)
    result = payslip_service.generate_batch(employees, payload.period())

    filename = f"payslips-{payload.month}-{payload.year}.zip"
    return Response(
        content=payslip_service.build_payslips_zip(result.payslips),
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Generated-Count": str(result.succeeded),
            "X-Failed-Count": str(result.failed),
        }
    )


@router.post("/amount-in-words")
def amount_in_words(payload: AmountInWordsRequest):
    """
    Spell out a rupee amount the way it appears on a payslip.
    """
    return {"amount": payload.amount, "words": to_words(payload.amount)}
