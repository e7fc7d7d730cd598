"""Tests for Google Sheets export."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from analytics_frontend.formatter import create_formatters
from analytics_frontend.spreadsheet import (
    GoogleSheetsExporter,
    SheetFormatter,
    SheetGrid,
    SpreadsheetRenderer,
)

SHEET_URL = "https://docs.google.com/spreadsheets/d/test_sheet_123/edit"


@pytest.fixture
def grid(settings, two_dim_result) -> SheetGrid:
    renderer = SpreadsheetRenderer(create_formatters(settings).cellifier)
    return renderer.pivot_table_grid(two_dim_result)


@pytest.fixture
def creds_file(tmp_path: Path) -> Path:
    path = tmp_path / "service-account.json"
    path.write_text('{"type": "service_account"}')
    return path


def created_spreadsheet(service: MagicMock) -> None:
    service.spreadsheets().create().execute.return_value = {
        "spreadsheetId": "test_sheet_123",
        "spreadsheetUrl": SHEET_URL,
        "sheets": [{"properties": {"sheetId": 7, "title": "Pivot Table"}}],
    }


class TestSheetFormatter:
    def test_get_header_format(self) -> None:
        format_dict = SheetFormatter.get_header_format()
        assert format_dict["textFormat"]["bold"] is True
        assert format_dict["verticalAlignment"] == "TOP"
        assert format_dict["backgroundColor"] == SheetFormatter.COLORS["header_bg"]

    def test_create_header_format_request(self) -> None:
        result = SheetFormatter.create_header_format_request(sheet_id=3, num_rows=2, num_columns=4)
        assert result["repeatCell"]["range"] == {
            "sheetId": 3,
            "startRowIndex": 0,
            "endRowIndex": 2,
            "startColumnIndex": 0,
            "endColumnIndex": 4,
        }

    def test_create_merge_request(self) -> None:
        result = SheetFormatter.create_merge_request(3, 1, 3, 0, 1)
        assert result["mergeCells"]["mergeType"] == "MERGE_ALL"
        assert result["mergeCells"]["range"]["endRowIndex"] == 3

    def test_create_number_format_request(self) -> None:
        result = SheetFormatter.create_number_format_request(3, 2, 1, "#,##0.00")
        cell_format = result["repeatCell"]["cell"]["userEnteredFormat"]
        assert cell_format["numberFormat"] == {"type": "NUMBER", "pattern": "#,##0.00"}
        assert result["repeatCell"]["fields"] == "userEnteredFormat.numberFormat"

    def test_create_text_style_request(self) -> None:
        result = SheetFormatter.create_text_style_request(3, 2, 1, italic=True)
        text_format = result["repeatCell"]["cell"]["userEnteredFormat"]["textFormat"]
        assert text_format == {"bold": False, "italic": True}

    def test_create_freeze_rows_request(self) -> None:
        result = SheetFormatter.create_freeze_rows_request(sheet_id=123, num_rows=2)
        assert result["updateSheetProperties"]["properties"]["gridProperties"]["frozenRowCount"] == 2

    def test_create_auto_resize_request(self) -> None:
        result = SheetFormatter.create_auto_resize_request(sheet_id=123, start_column=0, end_column=5)
        assert result["autoResizeDimensions"]["dimensions"]["dimension"] == "COLUMNS"
        assert result["autoResizeDimensions"]["dimensions"]["endIndex"] == 5

    def test_create_basic_filter_request(self) -> None:
        result = SheetFormatter.create_basic_filter_request(123, 4, 3)
        assert result["setBasicFilter"]["filter"]["range"]["endRowIndex"] == 4


class TestGoogleSheetsExporter:
    def test_init_without_credentials(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="Google Sheets credentials not configured"):
                GoogleSheetsExporter()

    def test_init_with_missing_file(self) -> None:
        with pytest.raises(ValueError, match="Credentials file not found"):
            GoogleSheetsExporter("/path/to/nonexistent/file.json")

    @patch("analytics_frontend.spreadsheet.google.service_account.Credentials.from_service_account_file")
    @patch("analytics_frontend.spreadsheet.google.build")
    def test_init_reads_environment(
        self, mock_build: Mock, mock_creds: Mock, creds_file: Path
    ) -> None:
        with patch.dict(os.environ, {"GOOGLE_APPLICATION_CREDENTIALS": str(creds_file)}):
            exporter = GoogleSheetsExporter()

        mock_creds.assert_called_once_with(str(creds_file), scopes=GoogleSheetsExporter.SCOPES)
        mock_build.assert_called_once_with("sheets", "v4", credentials=mock_creds.return_value)
        assert exporter.service is mock_build.return_value

    @patch("analytics_frontend.spreadsheet.google.service_account.Credentials.from_service_account_file")
    @patch("analytics_frontend.spreadsheet.google.build")
    def test_init_with_invalid_credentials(
        self, mock_build: Mock, mock_creds: Mock, creds_file: Path
    ) -> None:
        mock_creds.side_effect = ValueError("bad key")

        with pytest.raises(ValueError, match="Failed to load credentials: bad key"):
            GoogleSheetsExporter(str(creds_file))
        mock_build.assert_not_called()

    @patch("analytics_frontend.spreadsheet.google.service_account.Credentials.from_service_account_file")
    @patch("analytics_frontend.spreadsheet.google.build")
    def test_export_grid_success(
        self, mock_build: Mock, mock_creds: Mock, creds_file: Path, grid: SheetGrid
    ) -> None:
        mock_service = MagicMock()
        mock_build.return_value = mock_service
        created_spreadsheet(mock_service)

        exporter = GoogleSheetsExporter(str(creds_file))
        result = exporter.export_grid(grid, "Revenue by country")

        assert result == SHEET_URL

        create_body = mock_service.spreadsheets().create.call_args.kwargs["body"]
        assert create_body["properties"]["title"] == "Revenue by country"
        assert create_body["sheets"][0]["properties"]["title"] == "Pivot Table"

        update = mock_service.spreadsheets().values().update.call_args.kwargs
        assert update["spreadsheetId"] == "test_sheet_123"
        assert update["range"] == "'Pivot Table'!A1"
        assert update["valueInputOption"] == "USER_ENTERED"
        assert update["body"]["values"] == grid.to_rows()

        batch = mock_service.spreadsheets().batchUpdate.call_args.kwargs
        requests = batch["body"]["requests"]
        kinds = [next(iter(r)) for r in requests]
        assert kinds.count("mergeCells") == 1
        assert kinds.count("setBasicFilter") == 1
        assert kinds[-1] == "autoResizeDimensions"

        merge = next(r["mergeCells"] for r in requests if "mergeCells" in r)
        assert merge["range"] == {
            "sheetId": 7,
            "startRowIndex": 1,
            "endRowIndex": 3,
            "startColumnIndex": 0,
            "endColumnIndex": 1,
        }
        freeze = next(r for r in requests if "updateSheetProperties" in r)
        assert freeze["updateSheetProperties"]["properties"]["gridProperties"] == {
            "frozenRowCount": 1
        }
        patterns = [
            r["repeatCell"]["cell"]["userEnteredFormat"]["numberFormat"]["pattern"]
            for r in requests
            if "repeatCell" in r and "numberFormat" in r["repeatCell"]["cell"]["userEnteredFormat"]
        ]
        assert patterns == ["#,##0", "#,##0", "#,##0"]

    @patch("analytics_frontend.spreadsheet.google.service_account.Credentials.from_service_account_file")
    @patch("analytics_frontend.spreadsheet.google.build")
    def test_export_grid_api_error(
        self, mock_build: Mock, mock_creds: Mock, creds_file: Path, grid: SheetGrid
    ) -> None:
        from googleapiclient.errors import HttpError  # type: ignore[import-not-found]

        mock_service = MagicMock()
        mock_build.return_value = mock_service
        mock_service.spreadsheets().create().execute.side_effect = HttpError(
            resp=MagicMock(status=500), content=b"Internal Server Error"
        )

        exporter = GoogleSheetsExporter(str(creds_file))

        with pytest.raises(RuntimeError, match="Failed to export to Google Sheets"):
            exporter.export_grid(grid, "Revenue")

    @patch("analytics_frontend.spreadsheet.google.service_account.Credentials.from_service_account_file")
    @patch("analytics_frontend.spreadsheet.google.build")
    def test_export_grid_without_sheets(
        self, mock_build: Mock, mock_creds: Mock, creds_file: Path, grid: SheetGrid
    ) -> None:
        mock_service = MagicMock()
        mock_build.return_value = mock_service
        mock_service.spreadsheets().create().execute.return_value = {
            "spreadsheetId": "test_sheet_123",
            "spreadsheetUrl": SHEET_URL,
            "sheets": [],
        }

        exporter = GoogleSheetsExporter(str(creds_file))

        with pytest.raises(RuntimeError, match="No sheets found"):
            exporter.export_grid(grid, "Revenue")
        mock_service.spreadsheets().values().update.assert_not_called()

    @patch("analytics_frontend.spreadsheet.google.service_account.Credentials.from_service_account_file")
    @patch("analytics_frontend.spreadsheet.google.build")
    def test_empty_grid_skips_formatting(
        self, mock_build: Mock, mock_creds: Mock, creds_file: Path
    ) -> None:
        mock_service = MagicMock()
        mock_build.return_value = mock_service
        created_spreadsheet(mock_service)

        exporter = GoogleSheetsExporter(str(creds_file))
        exporter.export_grid(SheetGrid(), "Empty")

        mock_service.spreadsheets().batchUpdate.assert_not_called()
