"""Google Sheets exporter for rendered spreadsheet grids."""

from __future__ import annotations

import os
from typing import Any

from google.auth.exceptions import DefaultCredentialsError
from google.oauth2 import service_account
from googleapiclient.discovery import build  # type: ignore[import-not-found]
from googleapiclient.errors import HttpError  # type: ignore[import-not-found]

from ..core.logging_config import get_logger
from .formatter import SheetFormatter
from .renderer import SHEET_TITLE, SheetGrid

logger = get_logger(__name__)


class GoogleSheetsExporter:
    """Push a SheetGrid to a new Google Sheet."""

    SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

    def __init__(self, credentials_path: str | None = None) -> None:
        """Initialize the Google Sheets exporter.

        Args:
            credentials_path: Path to service account JSON credentials.
                             If None, reads from GOOGLE_APPLICATION_CREDENTIALS env var.

        Raises:
            ValueError: If credentials are not found or invalid
        """
        if credentials_path is None:
            credentials_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

        if not credentials_path:
            raise ValueError(
                "Google Sheets credentials not configured. "
                "Set GOOGLE_APPLICATION_CREDENTIALS environment variable "
                "or pass credentials_path to GoogleSheetsExporter."
            )

        if not os.path.exists(credentials_path):
            raise ValueError(f"Credentials file not found: {credentials_path}")

        try:
            self.credentials = service_account.Credentials.from_service_account_file(  # type: ignore[no-untyped-call]
                credentials_path, scopes=self.SCOPES
            )
            self.service = build("sheets", "v4", credentials=self.credentials)
            logger.info(
                "Google Sheets API initialized",
                extra={"credentials_path": credentials_path},
            )
        except (DefaultCredentialsError, ValueError, OSError) as e:
            logger.error(
                "Failed to initialize Google Sheets API",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise ValueError(f"Failed to load credentials: {e}") from e

        self.formatter = SheetFormatter()

    def export_grid(self, grid: SheetGrid, title: str) -> str:
        """Export a grid to a new Google Sheet.

        Writes the values, then merges spanned cells, styles and freezes the
        header rows, applies number formats and sizes the columns.

        Args:
            grid: Grid from SpreadsheetRenderer.table_grid or pivot_table_grid
            title: Title of the new spreadsheet

        Returns:
            URL of the created Google Sheet

        Raises:
            RuntimeError: If sheet creation or update fails
        """
        try:
            spreadsheet = self._create_spreadsheet(title, grid)
            spreadsheet_id = spreadsheet["spreadsheetId"]
            spreadsheet_url = spreadsheet["spreadsheetUrl"]

            sheets = spreadsheet.get("sheets", [])
            if not sheets:
                raise RuntimeError("No sheets found in created spreadsheet")
            sheet_id = sheets[0]["properties"]["sheetId"]

            logger.info(
                "Created Google Sheet",
                extra={"spreadsheet_id": spreadsheet_id, "title": title},
            )

            self.service.spreadsheets().values().update(
                spreadsheetId=spreadsheet_id,
                range=f"'{SHEET_TITLE}'!A1",
                valueInputOption="USER_ENTERED",
                body={"values": grid.to_rows()},
            ).execute()

            requests = self._format_requests(sheet_id, grid)
            if requests:
                self.service.spreadsheets().batchUpdate(
                    spreadsheetId=spreadsheet_id, body={"requests": requests}
                ).execute()

            logger.info(
                "Successfully exported grid to Google Sheets",
                extra={
                    "spreadsheet_id": spreadsheet_id,
                    "url": spreadsheet_url,
                    "rows": grid.height,
                    "columns": grid.width,
                },
            )

            return str(spreadsheet_url)

        except HttpError as e:
            logger.error(
                "Google Sheets API error during export",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise RuntimeError(f"Failed to export to Google Sheets: {e}") from e
        except Exception as e:
            logger.error(
                "Unexpected error during Google Sheets export",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise RuntimeError(f"Failed to export to Google Sheets: {e}") from e

    def _create_spreadsheet(self, title: str, grid: SheetGrid) -> dict[str, Any]:
        """Create a new spreadsheet whose only sheet is large enough for the grid.

        Args:
            title: Title for the spreadsheet
            grid: Grid that will be written to it

        Returns:
            Spreadsheet metadata dict
        """
        spreadsheet_body = {
            "properties": {"title": title},
            "sheets": [
                {
                    "properties": {
                        "title": SHEET_TITLE,
                        "gridProperties": {
                            "rowCount": max(grid.height, 100),
                            "columnCount": max(grid.width, 10),
                        },
                    }
                }
            ],
        }

        result: dict[str, Any] = (
            self.service.spreadsheets().create(body=spreadsheet_body).execute()
        )
        return result

    def _format_requests(self, sheet_id: int, grid: SheetGrid) -> list[dict[str, Any]]:
        if not grid.cells:
            return []

        requests: list[dict[str, Any]] = []

        if grid.header_rows:
            requests.append(
                self.formatter.create_header_format_request(
                    sheet_id, grid.header_rows, grid.width
                )
            )
            requests.append(
                self.formatter.create_freeze_rows_request(sheet_id, grid.header_rows)
            )

        for cell in grid.cells:
            if cell.row < grid.header_rows:
                continue
            if cell.bold or cell.italic:
                requests.append(
                    self.formatter.create_text_style_request(
                        sheet_id, cell.row, cell.column, bold=cell.bold, italic=cell.italic
                    )
                )
            if cell.number_format:
                requests.append(
                    self.formatter.create_number_format_request(
                        sheet_id, cell.row, cell.column, cell.number_format
                    )
                )

        for cell in grid.merges():
            requests.append(
                self.formatter.create_merge_request(
                    sheet_id,
                    cell.row,
                    cell.row + cell.row_span,
                    cell.column,
                    cell.column + cell.col_span,
                )
            )

        requests.append(self.formatter.create_basic_filter_request(sheet_id, grid.height, grid.width))
        requests.append(self.formatter.create_auto_resize_request(sheet_id, 0, grid.width))
        return requests
