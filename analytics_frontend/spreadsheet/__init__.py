"""Spreadsheet rendering: openpyxl workbooks and Google Sheets export."""

from .formatter import SheetFormatter
from .google import GoogleSheetsExporter
from .renderer import (
    SHEET_TITLE,
    GridCell,
    SheetGrid,
    SpreadsheetRenderer,
    SpreadsheetRendererVisitor,
    cell_value,
)

__all__ = [
    "SHEET_TITLE",
    "GoogleSheetsExporter",
    "GridCell",
    "SheetFormatter",
    "SheetGrid",
    "SpreadsheetRenderer",
    "SpreadsheetRendererVisitor",
    "cell_value",
]
