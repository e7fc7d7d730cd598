"""Result model: the dimensions, measures and tree/table views that renderers consume."""

from .loader import load_result, result_from_dict
from .model import (
    VALUES_NODE,
    Coordinates,
    Day,
    Dimension,
    DimensionField,
    Measure,
    MeasureField,
    Measures,
    Month,
    Result,
    ResultTable,
    Row,
    SequenceMember,
    TreeNode,
    Unit,
    Year,
    aggregate,
    group_by_prefix,
)

__all__ = [
    "VALUES_NODE",
    "Coordinates",
    "Day",
    "Dimension",
    "DimensionField",
    "Measure",
    "MeasureField",
    "Measures",
    "Month",
    "Result",
    "ResultTable",
    "Row",
    "SequenceMember",
    "TreeNode",
    "Unit",
    "Year",
    "aggregate",
    "group_by_prefix",
    "load_result",
    "result_from_dict",
]
