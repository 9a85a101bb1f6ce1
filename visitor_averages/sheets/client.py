import logging
from typing import Any, List, Optional, Protocol, Set

from google.api_core import retry
from google.api_core.exceptions import RetryError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

logger = logging.getLogger(__name__)

TRANSIENT_STATUSES = {429, 500, 502, 503, 504}


class SheetError(Exception):
    """Custom exception for sheet-related errors"""

    pass


class SpreadsheetClient(Protocol):
    """The four spreadsheet operations the moving average job relies on"""

    def list_sheet_names(self) -> Set[str]: ...

    def read_range(self, sheet_name: str, range_spec: str) -> List[List[Any]]: ...

    def clear_range(self, sheet_name: str, range_spec: str) -> None: ...

    def write_range(
        self, sheet_name: str, range_spec: str, values: List[List[Any]]
    ) -> None: ...


def _is_transient(exc: Exception) -> bool:
    return isinstance(exc, HttpError) and exc.resp.status in TRANSIENT_STATUSES


DEFAULT_RETRY = retry.Retry(predicate=_is_transient, initial=1.0, maximum=10.0, timeout=60.0)


def a1_range(sheet_name: str, range_spec: str) -> str:
    """Qualify a range with its sheet name, quoting the name for A1 notation"""
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'!{range_spec}"


class GoogleSheetsClient:
    """Handles all Google Sheets operations"""

    SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_path: str,
        service: Optional[Any] = None,
        retry_policy: Optional[retry.Retry] = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.credentials_path = credentials_path
        self.retry_policy = retry_policy or DEFAULT_RETRY
        self.service = service or self._build_sheets_service()

    def _build_sheets_service(self):
        """Create and return an authorized Sheets API service object"""
        try:
            creds = service_account.Credentials.from_service_account_file(
                self.credentials_path, scopes=self.SCOPES
            )
            return build("sheets", "v4", credentials=creds)
        except Exception as e:
            logger.error(f"Failed to build sheets service: {e}")
            raise SheetError(f"Could not initialize sheets service: {str(e)}")

    def _execute(self, request) -> dict:
        """Execute an API request, retrying transient HTTP failures"""
        return self.retry_policy(request.execute)()

    def list_sheet_names(self) -> Set[str]:
        """Get the titles of every sheet in the spreadsheet"""
        try:
            result = self._execute(
                self.service.spreadsheets().get(
                    spreadsheetId=self.spreadsheet_id,
                    fields="sheets.properties.title",
                )
            )
            return {sheet["properties"]["title"] for sheet in result.get("sheets", [])}
        except (HttpError, RetryError) as e:
            logger.error(f"Error listing sheets: {e}")
            raise SheetError(f"Failed to list sheets: {str(e)}")

    def read_range(self, sheet_name: str, range_spec: str) -> List[List[Any]]:
        """Read a range as rows of cells, numbers unformatted and dates as displayed"""
        range_name = a1_range(sheet_name, range_spec)
        try:
            result = self._execute(
                self.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=range_name,
                    valueRenderOption="UNFORMATTED_VALUE",
                    dateTimeRenderOption="FORMATTED_STRING",
                )
            )
            return result.get("values", [])
        except (HttpError, RetryError) as e:
            logger.error(f"Error reading {range_name}: {e}")
            raise SheetError(f"Failed to read range {range_name}: {str(e)}")

    def clear_range(self, sheet_name: str, range_spec: str) -> None:
        """Clear the values of a range, keeping its formatting"""
        range_name = a1_range(sheet_name, range_spec)
        try:
            self._execute(
                self.service.spreadsheets()
                .values()
                .clear(spreadsheetId=self.spreadsheet_id, range=range_name, body={})
            )
        except (HttpError, RetryError) as e:
            logger.error(f"Error clearing {range_name}: {e}")
            raise SheetError(f"Failed to clear range {range_name}: {str(e)}")

    def write_range(
        self, sheet_name: str, range_spec: str, values: List[List[Any]]
    ) -> None:
        """Write values to a range as literal (RAW) input"""
        range_name = a1_range(sheet_name, range_spec)
        try:
            self._execute(
                self.service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=self.spreadsheet_id,
                    range=range_name,
                    valueInputOption="RAW",
                    body={"values": values},
                )
            )
        except (HttpError, RetryError) as e:
            logger.error(f"Error writing {range_name}: {e}")
            raise SheetError(f"Failed to write range {range_name}: {str(e)}")
