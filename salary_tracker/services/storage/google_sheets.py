"""
Google Sheets Storage Implementation

DESIGN DECISION: A spreadsheet is offered as a shared backend because:
1. Users can inspect their raw data directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

The worksheet has two columns, ``key`` and ``value``; one row per key.
Values are the same serialized JSON strings every other backend stores.

TRADEOFFS:
- No transactions; the read-modify-write pattern above this layer is
  not safe if two devices write the same key
- A cell holds at most 50,000 characters, which bounds one owner's
  serialized collection
"""

from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from salary_tracker.config import GoogleSheetsSettings, get_settings
from salary_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageConnectionError,
    StorageError,
)


KEY_VALUE_COLUMNS = ["key", "value"]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._worksheet: Optional[gspread.Worksheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise StorageConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise StorageConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise StorageConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_key_value_sheet(self) -> gspread.Worksheet:
        """Get or create the key/value worksheet."""
        if self._worksheet is None:
            spreadsheet = self.get_spreadsheet()
            try:
                sheet = spreadsheet.worksheet(self._settings.worksheet_name)
            except gspread.WorksheetNotFound:
                sheet = spreadsheet.add_worksheet(
                    title=self._settings.worksheet_name,
                    rows=100,
                    cols=len(KEY_VALUE_COLUMNS),
                )
                sheet.append_row(KEY_VALUE_COLUMNS)
            self._worksheet = sheet
        return self._worksheet


class GoogleSheetsKeyValueStore(KeyValueStorageInterface):
    """
    Google Sheets implementation of key-value storage.

    Row 1 is the header; keys are looked up by scanning column A.
    """

    def __init__(
        self,
        client: Optional[GoogleSheetsClient] = None,
        namespace: str = "",
    ):
        super().__init__(namespace)
        self._client = client or GoogleSheetsClient()

    def _find_row(self, rows: list[list[str]], full_key: str) -> Optional[int]:
        """1-based sheet row index holding ``full_key``, or None."""
        for idx, row in enumerate(rows[1:], start=2):  # Row 1 is header
            if row and row[0] == full_key:
                return idx
        return None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _read(self, full_key: str) -> Optional[str]:
        try:
            rows = self._client.get_key_value_sheet().get_all_values()
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read {full_key}: {e}")

        row_idx = self._find_row(rows, full_key)
        if row_idx is None:
            return None
        row = rows[row_idx - 1]
        return row[1] if len(row) > 1 else ""

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _write(self, full_key: str, value: str) -> None:
        try:
            sheet = self._client.get_key_value_sheet()
            row_idx = self._find_row(sheet.get_all_values(), full_key)
            if row_idx is None:
                sheet.append_row([full_key, value], value_input_option="RAW")
            else:
                sheet.update(
                    range_name=f"B{row_idx}",
                    values=[[value]],
                    value_input_option="RAW",
                )
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to write {full_key}: {e}")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _delete(self, full_key: str) -> None:
        try:
            sheet = self._client.get_key_value_sheet()
            row_idx = self._find_row(sheet.get_all_values(), full_key)
            if row_idx is not None:
                sheet.delete_rows(row_idx)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to remove {full_key}: {e}")
