from __future__ import annotations

from enum import Enum


class ChartType(str, Enum):
    AUTO = "auto"
    BAR = "bar"
    LINE = "line"
    STACKED_BAR = "stacked_bar"
    GROUPED_BAR = "grouped_bar"
    PIE = "pie"


class OutputType(str, Enum):
    AUTO = "auto"
    PIVOT_TABLE = "pivot_table"
    TABLE = "table"


class CellDataType(str, Enum):
    """Spreadsheet cell data types, rendered as ``data-type`` attributes."""

    STRING = "s"
    NUMERIC = "n"
    BOOL = "b"
    NULL = "null"
    FORMULA = "f"


class Aggregation(str, Enum):
    """How a measure rolls up into pivot table subtotals."""

    SUM = "sum"
    MIN = "min"
    MAX = "max"
    COUNT = "count"
