from typing import Any, Dict, List, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class ValidationError(AppException):
    """Caller-level precondition failed (missing period, bad employee data)."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details
        )

class CalculationError(AppException):
    """Computed payslip totals were not finite."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=422,
            error_code="CALCULATION_ERROR",
            details=details
        )

class EmployeeNotFoundError(AppException):
    def __init__(self, message: str = "Employee not found"):
        super().__init__(
            message=message,
            status_code=404,
            error_code="EMPLOYEE_NOT_FOUND"
        )

class BatchFailedError(AppException):
    def __init__(self, failed_employees: List[str]):
        super().__init__(
            message=f"Failed to generate payslips for all selected employees: {', '.join(failed_employees)}",
            status_code=400,
            error_code="BATCH_FAILED",
            details={"failed_employees": failed_employees}
        )
        self.failed_employees = failed_employees

class DirectoryNotConfiguredError(AppException):
    def __init__(self, message: str = "No default spreadsheet configured. Please set DEFAULT_SPREADSHEET_ID in environment variables."):
        super().__init__(
            message=message,
            status_code=400,
            error_code="DIRECTORY_NOT_CONFIGURED"
        )

class DirectoryAccessError(AppException):
    def __init__(self, message: str = "Unable to access the configured Google Sheet. Please check permissions and API access."):
        super().__init__(
            message=message,
            status_code=403,
            error_code="DIRECTORY_ACCESS_DENIED"
        )

class DirectoryError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=502,
            error_code="DIRECTORY_UNAVAILABLE",
            details=details
        )
