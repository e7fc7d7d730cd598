"""Spreadsheet rendering of results.

Results go through the same table model as the HTML renderer. A
``SpreadsheetRendererVisitor`` lays the table out on a ``SheetGrid`` (cell
positions, values, merges and styles), which is then written to an
``openpyxl`` workbook or pushed to Google Sheets.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from ..core.enums import CellDataType
from ..core.logging_config import get_logger
from ..formatter.base import Cellifier, CellProperties
from ..formatter.factory import create_formatters
from ..result.model import VALUES_NODE, Result
from ..table.adapter import PivotTableAdapter, TableAdapter
from ..table.model import (
    Cell,
    DataCell,
    FooterCell,
    HeaderCell,
    Row,
    Table,
    TableBody,
    TableFooter,
    TableHeader,
    TableVisitor,
)
from ..table.transformer import transform_result_set_to_table, transform_tree_to_table
from ..table.util import FrontendUtil

logger = get_logger(__name__)

SHEET_TITLE = "Pivot Table"
MIN_COLUMN_WIDTH = 8
MAX_COLUMN_WIDTH = 60


@dataclass
class GridCell:
    row: int
    column: int
    value: Any
    number_format: str | None = None
    bold: bool = False
    italic: bool = False
    row_span: int = 1
    col_span: int = 1

    @property
    def is_merged(self) -> bool:
        return self.row_span > 1 or self.col_span > 1


@dataclass
class SheetGrid:
    """Cells placed on a zero-based grid, plus the number of header rows."""

    cells: list[GridCell] = field(default_factory=list)
    header_rows: int = 0

    @property
    def height(self) -> int:
        return max((c.row + c.row_span for c in self.cells), default=0)

    @property
    def width(self) -> int:
        return max((c.column + c.col_span for c in self.cells), default=0)

    def merges(self) -> Iterator[GridCell]:
        return (c for c in self.cells if c.is_merged)

    def to_rows(self) -> list[list[Any]]:
        """Return the grid as a rectangular list of rows, blanks as ``""``."""
        rows: list[list[Any]] = [["" for _ in range(self.width)] for _ in range(self.height)]
        for c in self.cells:
            rows[c.row][c.column] = "" if c.value is None else c.value
        return rows


def cell_value(properties: CellProperties) -> Any:
    """Convert cellifier output to the Python value a spreadsheet cell holds."""
    if properties.type is CellDataType.NULL:
        return None
    if properties.type is CellDataType.BOOL:
        return properties.content == "1"
    if properties.type is CellDataType.NUMERIC:
        try:
            return int(properties.content)
        except ValueError:
            return float(properties.content)
    return properties.content


class SpreadsheetRendererVisitor(TableVisitor[None]):
    """Lay a table out on a SheetGrid, honouring row and column spans."""

    def __init__(self, cellifier: Cellifier):
        self.cellifier = cellifier
        self.grid = SheetGrid()
        self._row = 0
        self._column = 0
        self._occupied: set[tuple[int, int]] = set()

    def visit_table(self, table: Table) -> None:
        self.grid = SheetGrid()
        self._row = 0
        self._occupied = set()
        for group in table:
            group.accept(self)

    def visit_table_header(self, header: TableHeader) -> None:
        for row in header:
            row.accept(self)
        self.grid.header_rows = self._row

    def visit_table_body(self, body: TableBody) -> None:
        for row in body:
            row.accept(self)

    def visit_table_footer(self, footer: TableFooter) -> None:
        for row in footer:
            row.accept(self)

    def visit_row(self, row: Row) -> None:
        self._column = 0
        for cell in row:
            cell.accept(self)
        self._row += 1

    def visit_header_cell(self, cell: HeaderCell) -> None:
        self._place(cell, bold=True)

    def visit_data_cell(self, cell: DataCell) -> None:
        self._place(cell)

    def visit_footer_cell(self, cell: FooterCell) -> None:
        self._place(cell, italic=True)

    def _place(self, cell: Cell, bold: bool = False, italic: bool = False) -> None:
        # Skip positions covered by row spans from earlier rows
        while (self._row, self._column) in self._occupied:
            self._column += 1

        properties = self.cellifier.to_cell(cell.content)
        self.grid.cells.append(
            GridCell(
                row=self._row,
                column=self._column,
                value=cell_value(properties),
                number_format=properties.format_code,
                bold=bold,
                italic=italic,
                row_span=cell.row_span,
                col_span=cell.col_span,
            )
        )

        for r in range(self._row, self._row + cell.row_span):
            for c in range(self._column, self._column + cell.col_span):
                self._occupied.add((r, c))
        self._column += cell.col_span


class SpreadsheetRenderer:
    """Render results as spreadsheet workbooks.

    Args:
        cellifier: Converts cell contents to typed spreadsheet values
            (default: the cellifier from create_formatters())
    """

    def __init__(self, cellifier: Cellifier | None = None):
        self.cellifier = cellifier or create_formatters().cellifier

    def render(
        self,
        result: Result,
        dimensions: Sequence[str] | None = None,
        measures: Sequence[str] | None = None,
    ) -> Workbook:
        """Render a flat table of the given dimensions and measures."""
        return self.to_workbook(self.table_grid(result, dimensions, measures))

    def render_pivot_table(
        self,
        result: Result,
        measures: Sequence[str] | None = None,
        rows: Sequence[str] = (),
        columns: Sequence[str] = (VALUES_NODE,),
    ) -> Workbook:
        """Render a pivot table.

        Every row dimension gets subtotal rows for the measures that
        declare an aggregation.

        Args:
            result: Result to render
            measures: Measures to include (default: all)
            rows: Dimensions laid out as row headers
            columns: Dimensions laid out as column headers; include
                ``@values`` to spread the measures over columns

        Returns:
            Workbook with a single "Pivot Table" sheet
        """
        return self.to_workbook(self.pivot_table_grid(result, measures, rows, columns))

    def table_grid(
        self,
        result: Result,
        dimensions: Sequence[str] | None = None,
        measures: Sequence[str] | None = None,
    ) -> SheetGrid:
        table = transform_result_set_to_table(TableAdapter(result, dimensions, measures))
        return self._layout(table)

    def pivot_table_grid(
        self,
        result: Result,
        measures: Sequence[str] | None = None,
        rows: Sequence[str] = (),
        columns: Sequence[str] = (VALUES_NODE,),
    ) -> SheetGrid:
        if not rows:
            rows = FrontendUtil.get_rows([d.name for d in result.dimensions], columns)
        dimensions = [d for d in (*rows, *columns) if d != VALUES_NODE]
        selected = result.select(dimensions, measures)
        table = transform_tree_to_table(
            PivotTableAdapter.adapt(selected.tree),
            pivoted_nodes=list(columns),
            superfluous_legends=[VALUES_NODE],
            subtotals=dimensions,
        )
        return self._layout(table)

    def _layout(self, table: Table) -> SheetGrid:
        visitor = SpreadsheetRendererVisitor(self.cellifier)
        table.accept(visitor)
        return visitor.grid

    @staticmethod
    def to_workbook(grid: SheetGrid) -> Workbook:
        """Write a grid to a new workbook with one sheet titled "Pivot Table"."""
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        widths: dict[int, int] = {}
        for c in grid.cells:
            cell = ws.cell(row=c.row + 1, column=c.column + 1, value=c.value)
            if c.number_format:
                cell.number_format = c.number_format
            if c.bold or c.italic:
                cell.font = Font(bold=c.bold, italic=c.italic)
            if c.is_merged:
                cell.alignment = Alignment(vertical="top")
                ws.merge_cells(
                    start_row=c.row + 1,
                    start_column=c.column + 1,
                    end_row=c.row + c.row_span,
                    end_column=c.column + c.col_span,
                )
            if c.col_span == 1 and c.value is not None:
                widths[c.column] = max(widths.get(c.column, 0), len(str(c.value)))

        # Size columns to their content
        for column, width in widths.items():
            ws.column_dimensions[get_column_letter(column + 1)].width = min(
                max(width + 2, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH
            )

        ws.auto_filter.ref = ws.dimensions

        logger.debug(
            "Workbook rendered",
            extra={"rows": grid.height, "columns": grid.width, "merges": sum(1 for _ in grid.merges())},
        )
        return wb
