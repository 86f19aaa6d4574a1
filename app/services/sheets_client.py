import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from app.core.config import SheetsSettings
from app.core.exceptions import DirectoryAccessError, DirectoryError

logger = logging.getLogger(__name__)

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"
SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class SheetsUnavailableError(DirectoryError):
    """Transient upstream failure; retried before surfacing."""


class GoogleSheetsClient:
    """
    Read-only client for the Google Sheets v4 REST API.

    Authenticates with a service account when one is configured, otherwise
    sends the API key as a query parameter (sheet must be link-shared).
    """

    def __init__(self, sheets_settings: SheetsSettings):
        self.settings = sheets_settings
        self._session: Optional[requests.Session] = None

    def _build_session(self) -> requests.Session:
        if self.settings.has_service_account:
            credentials = service_account.Credentials.from_service_account_info(
                {
                    "type": "service_account",
                    "project_id": self.settings.project_id,
                    "private_key_id": self.settings.private_key_id,
                    # Keys pasted into .env files carry literal "\n" sequences
                    "private_key": self.settings.private_key.replace("\\n", "\n"),
                    "client_email": self.settings.client_email,
                    "client_id": self.settings.client_id,
                    "token_uri": "https://oauth2.googleapis.com/token",
                },
                scopes=SCOPES,
            )
            logger.info("Using service account credentials for Google Sheets")
            return AuthorizedSession(credentials)

        if not self.settings.api_key:
            logger.warning("No Google Sheets credentials configured; requests will be anonymous")
        return requests.Session()

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = self._build_session()
        return self._session

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=1, max=8),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout, SheetsUnavailableError)),
        reraise=True
    )
    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = dict(params or {})
        if not self.settings.has_service_account and self.settings.api_key:
            params["key"] = self.settings.api_key

        response = self.session.get(url, params=params, timeout=self.settings.timeout_seconds)

        if response.status_code in RETRYABLE_STATUS:
            logger.warning(f"Google Sheets returned {response.status_code}, retrying")
            raise SheetsUnavailableError(
                f"Google Sheets temporarily unavailable ({response.status_code})"
            )
        if response.status_code in (401, 403, 404):
            logger.error(f"Google Sheets access denied: {response.status_code}")
            raise DirectoryAccessError()

        response.raise_for_status()
        return response.json()

    def _request(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            return self._get(url, params)
        except (DirectoryError, DirectoryAccessError):
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Google Sheets request failed: {e}")
            raise DirectoryError(f"Failed to fetch employees from Google Sheets: {e}")

    def get_values(self, spreadsheet_id: str, range_: str) -> List[List[str]]:
        """Return the cell values of ``range_`` as rows (empty list when blank)."""
        encoded_range = quote(range_, safe="!:'")
        data = self._request(f"{SHEETS_API_URL}/{spreadsheet_id}/values/{encoded_range}")
        return data.get("values", [])

    def get_spreadsheet(self, spreadsheet_id: str) -> Dict[str, Any]:
        """Fetch spreadsheet metadata; used to check that the sheet is reachable."""
        return self._request(
            f"{SHEETS_API_URL}/{spreadsheet_id}",
            params={"fields": "spreadsheetId,properties.title"},
        )
