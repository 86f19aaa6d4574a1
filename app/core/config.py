import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class SheetsSettings(BaseModel):
    spreadsheet_id: Optional[str] = Field(default=os.getenv("DEFAULT_SPREADSHEET_ID"))
    default_range: str = Field(default=os.getenv("DEFAULT_SHEET_RANGE", "Sheet1!A2:Z"))
    api_key: Optional[str] = Field(default=os.getenv("GOOGLE_SHEETS_API_KEY"))

    # Service account credentials (take precedence over the API key)
    project_id: Optional[str] = Field(default=os.getenv("GOOGLE_SHEETS_PROJECT_ID"))
    private_key_id: Optional[str] = Field(default=os.getenv("GOOGLE_SHEETS_PRIVATE_KEY_ID"))
    private_key: Optional[str] = Field(default=os.getenv("GOOGLE_SHEETS_PRIVATE_KEY"))
    client_email: Optional[str] = Field(default=os.getenv("GOOGLE_SHEETS_CLIENT_EMAIL"))
    client_id: Optional[str] = Field(default=os.getenv("GOOGLE_SHEETS_CLIENT_ID"))

    timeout_seconds: float = float(os.getenv("SHEETS_TIMEOUT_SECONDS", "15"))
    cache_ttl_seconds: float = float(os.getenv("EMPLOYEE_CACHE_TTL_SECONDS", "60"))

    @property
    def has_service_account(self) -> bool:
        return bool(self.private_key and self.client_email)

class CompanySettings(BaseModel):
    name: str = Field(default=os.getenv("COMPANY_NAME", "Company Name"))
    address: str = Field(default=os.getenv("COMPANY_ADDRESS", "Company Address"))

class Config(BaseModel):
    app_name: str = "School Payslip Generator"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Employee directory (Google Sheets)
    sheets: SheetsSettings = SheetsSettings()

    # Printed on every payslip
    company: CompanySettings = CompanySettings()

    # Payroll defaults
    default_working_days: int = int(os.getenv("DEFAULT_WORKING_DAYS", "30"))

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "60"))

settings = Config()

# --- Startup Validation ---
_logger = logging.getLogger(__name__)
if not settings.sheets.spreadsheet_id:
    if settings.environment != "development":
        _logger.warning("⚠ DEFAULT_SPREADSHEET_ID is not set; employee lookups will fail.")
    else:
        _logger.info("DEFAULT_SPREADSHEET_ID is not set; the employee directory is unconfigured.")
