"""Request builders for formatting Google Sheets."""

from __future__ import annotations

from typing import Any


class SheetFormatter:
    """Build Sheets v4 ``batchUpdate`` requests for header styles, merges and layout."""

    # RGB on a 0-1 scale
    COLORS = {
        "header_bg": {"red": 0.93, "green": 0.94, "blue": 0.96},
        "header_text": {"red": 0.13, "green": 0.15, "blue": 0.19},
    }

    @staticmethod
    def get_header_format() -> dict[str, Any]:
        """``userEnteredFormat`` shared by every header cell."""
        return {
            "backgroundColor": SheetFormatter.COLORS["header_bg"],
            "textFormat": {
                "foregroundColor": SheetFormatter.COLORS["header_text"],
                "bold": True,
                "fontSize": 10,
            },
            "verticalAlignment": "TOP",
        }

    @staticmethod
    def _range(
        sheet_id: int, start_row: int, end_row: int, start_column: int, end_column: int
    ) -> dict[str, int]:
        return {
            "sheetId": sheet_id,
            "startRowIndex": start_row,
            "endRowIndex": end_row,
            "startColumnIndex": start_column,
            "endColumnIndex": end_column,
        }

    @staticmethod
    def create_header_format_request(
        sheet_id: int, num_rows: int, num_columns: int
    ) -> dict[str, Any]:
        """Style the top ``num_rows`` rows (the pivot column headers) across ``num_columns``."""
        return {
            "repeatCell": {
                "range": SheetFormatter._range(sheet_id, 0, num_rows, 0, num_columns),
                "cell": {"userEnteredFormat": SheetFormatter.get_header_format()},
                "fields": "userEnteredFormat",
            }
        }

    @staticmethod
    def create_text_style_request(
        sheet_id: int, row: int, column: int, bold: bool = False, italic: bool = False
    ) -> dict[str, Any]:
        return {
            "repeatCell": {
                "range": SheetFormatter._range(sheet_id, row, row + 1, column, column + 1),
                "cell": {"userEnteredFormat": {"textFormat": {"bold": bold, "italic": italic}}},
                "fields": "userEnteredFormat.textFormat",
            }
        }

    @staticmethod
    def create_number_format_request(
        sheet_id: int, row: int, column: int, pattern: str
    ) -> dict[str, Any]:
        """Create request setting a number format pattern (e.g. ``#,##0.00``) on one cell."""
        return {
            "repeatCell": {
                "range": SheetFormatter._range(sheet_id, row, row + 1, column, column + 1),
                "cell": {
                    "userEnteredFormat": {
                        "numberFormat": {"type": "NUMBER", "pattern": pattern}
                    }
                },
                "fields": "userEnteredFormat.numberFormat",
            }
        }

    @staticmethod
    def create_merge_request(
        sheet_id: int, start_row: int, end_row: int, start_column: int, end_column: int
    ) -> dict[str, Any]:
        """Merge rows ``start_row:end_row`` of columns ``start_column:end_column`` (0-based, end exclusive)."""
        return {
            "mergeCells": {
                "range": SheetFormatter._range(
                    sheet_id, start_row, end_row, start_column, end_column
                ),
                "mergeType": "MERGE_ALL",
            }
        }

    @staticmethod
    def create_freeze_rows_request(sheet_id: int, num_rows: int = 1) -> dict[str, Any]:
        """Keep the header rows visible while scrolling."""
        return {
            "updateSheetProperties": {
                "properties": {
                    "sheetId": sheet_id,
                    "gridProperties": {"frozenRowCount": num_rows},
                },
                "fields": "gridProperties.frozenRowCount",
            }
        }

    @staticmethod
    def create_auto_resize_request(
        sheet_id: int, start_column: int, end_column: int
    ) -> dict[str, Any]:
        """Fit the widths of columns ``start_column:end_column`` to their content."""
        return {
            "autoResizeDimensions": {
                "dimensions": {
                    "sheetId": sheet_id,
                    "dimension": "COLUMNS",
                    "startIndex": start_column,
                    "endIndex": end_column,
                }
            }
        }

    @staticmethod
    def create_basic_filter_request(
        sheet_id: int, num_rows: int, num_columns: int
    ) -> dict[str, Any]:
        return {
            "setBasicFilter": {
                "filter": {"range": SheetFormatter._range(sheet_id, 0, num_rows, 0, num_columns)}
            }
        }
