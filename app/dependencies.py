from app.core.config import settings
from app.services.employee_directory import EmployeeDirectory
from app.services.sheets_client import GoogleSheetsClient

# One directory per process so the read cache is shared by every request.
# The HTTP session is created lazily on first use.
sheets_client = GoogleSheetsClient(settings.sheets)

directory = EmployeeDirectory(
    client=sheets_client,
    spreadsheet_id=settings.sheets.spreadsheet_id,
    default_range=settings.sheets.default_range,
    cache_ttl_seconds=settings.sheets.cache_ttl_seconds,
)

def get_directory() -> EmployeeDirectory:
    """
    Directory Provider: the shared employee directory.
    Tests swap it out through app.dependency_overrides.
    """
    return directory
