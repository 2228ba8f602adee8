"""
Google Sheets backed record store for student account data.
One worksheet holds a header row followed by one row per student.
"""
import base64
import json
import os
from typing import Any, List, Optional, Sequence

from google.oauth2 import service_account
import gspread
import gspread.exceptions
from gspread.utils import rowcol_to_a1

from core.errors import NotFoundError, PersistenceError
from core.logger import logger
from sheets.store import RecordStore

SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive'
]


class GoogleSheetsStore(RecordStore):
    """Reads and writes account rows in a single Google Sheets worksheet."""

    def __init__(
        self,
        spreadsheet_id: Optional[str] = None,
        worksheet_name: Optional[str] = None,
        client: Optional[gspread.Client] = None,
    ):
        """Initialize Google Sheets client with service account credentials."""
        self.spreadsheet_id = spreadsheet_id or os.getenv('GOOGLE_SHEETS_SPREADSHEET_ID')
        self.worksheet_name = worksheet_name or os.getenv('GOOGLE_SHEETS_WORKSHEET', 'Accounts')

        if not self.spreadsheet_id:
            raise ValueError("GOOGLE_SHEETS_SPREADSHEET_ID environment variable is required")

        self.client = client or self._initialize_client()

        # Worksheet metadata only; row data is always read fresh
        self._worksheet = None

    def _initialize_client(self) -> gspread.Client:
        """Initialize gspread client with service account credentials."""
        try:
            # 1. Try Base64 encoded JSON (Best for Render/Production)
            service_account_base64 = os.getenv('SERVICE_ACCOUNT_BASE64')
            # 2. Try Raw JSON string
            service_account_json = os.getenv('SERVICE_ACCOUNT_JSON')

            if service_account_base64:
                try:
                    decoded_json = base64.b64decode(service_account_base64).decode('utf-8')
                    service_account_info = json.loads(decoded_json)
                    credentials = service_account.Credentials.from_service_account_info(
                        service_account_info, scopes=SCOPES
                    )
                except Exception as e:
                    raise ValueError(f"Invalid SERVICE_ACCOUNT_BASE64: {e}")
            elif service_account_json:
                try:
                    service_account_info = json.loads(service_account_json)
                    credentials = service_account.Credentials.from_service_account_info(
                        service_account_info, scopes=SCOPES
                    )
                except json.JSONDecodeError as e:
                    raise ValueError(f"Invalid SERVICE_ACCOUNT_JSON format: {e}")
            else:
                # Fall back to file path (for local development)
                service_account_path = os.getenv('GOOGLE_SERVICE_ACCOUNT_PATH', './service_account.json')

                if not os.path.exists(service_account_path):
                    raise FileNotFoundError(
                        f"Service account file not found: {service_account_path}. "
                        "Either set SERVICE_ACCOUNT_JSON environment variable or provide a valid file path."
                    )

                credentials = service_account.Credentials.from_service_account_file(
                    service_account_path, scopes=SCOPES
                )

            client = gspread.authorize(credentials)
            logger.info("Google Sheets client initialized successfully")
            return client

        except Exception as e:
            logger.error(f"Error initializing Google Sheets client: {str(e)}", exc_info=True)
            raise

    def _get_worksheet(self) -> gspread.Worksheet:
        """Get the accounts worksheet by name, checking the object cache first."""
        if self._worksheet is not None:
            return self._worksheet

        try:
            spreadsheet = self.client.open_by_key(self.spreadsheet_id)
        except gspread.exceptions.SpreadsheetNotFound:
            logger.error(f"Spreadsheet not found: {self.spreadsheet_id}")
            raise NotFoundError(f"Spreadsheet not found: {self.spreadsheet_id}")

        try:
            self._worksheet = spreadsheet.worksheet(self.worksheet_name)
        except gspread.exceptions.WorksheetNotFound:
            worksheets = spreadsheet.worksheets()
            if not worksheets:
                error_msg = (
                    f"Worksheet '{self.worksheet_name}' not found in spreadsheet {self.spreadsheet_id} "
                    "(spreadsheet is empty)"
                )
                logger.error(error_msg)
                raise NotFoundError(error_msg)
            first_worksheet = worksheets[0]
            logger.warning(
                f"Worksheet '{self.worksheet_name}' not found in spreadsheet {self.spreadsheet_id}. "
                f"Available worksheets: {[ws.title for ws in worksheets]}. "
                f"Using first worksheet: '{first_worksheet.title}'"
            )
            self._worksheet = first_worksheet
        return self._worksheet

    def read_all(self) -> List[List[Any]]:
        worksheet = self._get_worksheet()
        try:
            rows = worksheet.get_all_values()
        except gspread.exceptions.APIError as e:
            logger.error(f"Google Sheets API error reading accounts: {str(e)}", exc_info=True)
            raise PersistenceError(f"Failed to read accounts spreadsheet: {str(e)}")
        logger.debug(f"Read {len(rows)} rows from worksheet '{worksheet.title}'")
        return rows

    def write_row(self, row_index: int, values: Sequence[Any], start_column: int = 0) -> None:
        worksheet = self._get_worksheet()
        # Sheets rows and columns are 1-based
        start = rowcol_to_a1(row_index + 1, start_column + 1)
        end = rowcol_to_a1(row_index + 1, start_column + len(values))
        try:
            worksheet.update(
                range_name=f"{start}:{end}",
                values=[list(values)],
                value_input_option='RAW',
            )
        except gspread.exceptions.APIError as e:
            logger.error(f"Google Sheets API error updating row {row_index + 1}: {str(e)}", exc_info=True)
            raise PersistenceError(f"Failed to update spreadsheet row: {str(e)}")

    def append_row(self, values: Sequence[Any]) -> None:
        worksheet = self._get_worksheet()
        try:
            worksheet.append_row(list(values), value_input_option='RAW')
        except gspread.exceptions.APIError as e:
            logger.error(f"Google Sheets API error appending row: {str(e)}", exc_info=True)
            raise PersistenceError(f"Failed to append spreadsheet row: {str(e)}")

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> None:
        worksheet = self._get_worksheet()
        try:
            worksheet.append_rows([list(row) for row in rows], value_input_option='RAW')
        except gspread.exceptions.APIError as e:
            logger.error(f"Google Sheets API error appending {len(rows)} rows: {str(e)}", exc_info=True)
            raise PersistenceError(f"Failed to append spreadsheet rows: {str(e)}")
