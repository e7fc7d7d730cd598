"""Presentation-neutral table model and the transformers that build it.

Main Components:
    - Table, TableHeader/TableBody/TableFooter, Row and cells: the model
    - Label, Member, Value: wrappers marking the role of a cell's content
    - PivotTableAdapter / TableAdapter: views of a Result for the transformers
    - transform_tree_to_table: pivot layout with row and column spans
    - transform_result_set_to_table: flat layout, one row per record
"""

from .adapter import PivotNode, PivotTableAdapter, TableAdapter, TableField
from .model import (
    Cell,
    DataCell,
    FooterCell,
    HeaderCell,
    Label,
    Member,
    Property,
    Row,
    RowGroup,
    Table,
    TableBody,
    TableFooter,
    TableHeader,
    TableVisitor,
    Value,
)
from .transformer import transform_result_set_to_table, transform_tree_to_table
from .util import FrontendUtil

__all__ = [
    "Cell",
    "DataCell",
    "FooterCell",
    "FrontendUtil",
    "HeaderCell",
    "Label",
    "Member",
    "PivotNode",
    "PivotTableAdapter",
    "Property",
    "Row",
    "RowGroup",
    "Table",
    "TableAdapter",
    "TableBody",
    "TableField",
    "TableFooter",
    "TableHeader",
    "TableVisitor",
    "Value",
    "transform_result_set_to_table",
    "transform_tree_to_table",
]
