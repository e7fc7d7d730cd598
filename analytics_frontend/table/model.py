"""Generic table model produced by the pivot/table transformers.

The model is deliberately presentation-neutral: HTML and spreadsheet
renderers both walk it through ``TableVisitor``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class TableVisitor(ABC, Generic[T]):
    @abstractmethod
    def visit_table(self, table: Table) -> T: ...

    @abstractmethod
    def visit_table_header(self, header: TableHeader) -> T: ...

    @abstractmethod
    def visit_table_body(self, body: TableBody) -> T: ...

    @abstractmethod
    def visit_table_footer(self, footer: TableFooter) -> T: ...

    @abstractmethod
    def visit_row(self, row: Row) -> T: ...

    @abstractmethod
    def visit_header_cell(self, cell: HeaderCell) -> T: ...

    @abstractmethod
    def visit_data_cell(self, cell: DataCell) -> T: ...

    @abstractmethod
    def visit_footer_cell(self, cell: FooterCell) -> T: ...

    # Property visits default to the raw content
    def visit_label(self, label: Label) -> Any:
        return label.content

    def visit_member(self, member: Member) -> Any:
        return member.content

    def visit_value(self, value: Value) -> Any:
        return value.content


@dataclass(frozen=True)
class Property:
    """Wrapper that tells renderers what role a cell's content plays."""

    content: Any

    def accept(self, visitor: TableVisitor[Any]) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Label(Property):
    """A legend: dimension or measure label."""

    def accept(self, visitor: TableVisitor[Any]) -> Any:
        return visitor.visit_label(self)


@dataclass(frozen=True)
class Member(Property):
    """A dimension member (or measure label on the ``@values`` level)."""

    def accept(self, visitor: TableVisitor[Any]) -> Any:
        return visitor.visit_member(self)


@dataclass(frozen=True)
class Value(Property):
    """A measure value."""

    def accept(self, visitor: TableVisitor[Any]) -> Any:
        return visitor.visit_value(self)


@dataclass
class Cell:
    content: Any = ""
    row_span: int = 1
    col_span: int = 1

    def accept(self, visitor: TableVisitor[T]) -> T:
        raise NotImplementedError


@dataclass
class HeaderCell(Cell):
    def accept(self, visitor: TableVisitor[T]) -> T:
        return visitor.visit_header_cell(self)


@dataclass
class DataCell(Cell):
    def accept(self, visitor: TableVisitor[T]) -> T:
        return visitor.visit_data_cell(self)


@dataclass
class FooterCell(Cell):
    def accept(self, visitor: TableVisitor[T]) -> T:
        return visitor.visit_footer_cell(self)


@dataclass
class Row:
    cells: list[Cell] = field(default_factory=list)

    def append(self, cell: Cell) -> None:
        self.cells.append(cell)

    @property
    def width(self) -> int:
        return sum(cell.col_span for cell in self.cells)

    def accept(self, visitor: TableVisitor[T]) -> T:
        return visitor.visit_row(self)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)


@dataclass
class RowGroup:
    rows: list[Row] = field(default_factory=list)

    def append(self, row: Row) -> None:
        self.rows.append(row)

    def accept(self, visitor: TableVisitor[T]) -> T:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


@dataclass
class TableHeader(RowGroup):
    def accept(self, visitor: TableVisitor[T]) -> T:
        return visitor.visit_table_header(self)


@dataclass
class TableBody(RowGroup):
    def accept(self, visitor: TableVisitor[T]) -> T:
        return visitor.visit_table_body(self)


@dataclass
class TableFooter(RowGroup):
    def accept(self, visitor: TableVisitor[T]) -> T:
        return visitor.visit_table_footer(self)


@dataclass
class Table:
    header: TableHeader = field(default_factory=TableHeader)
    body: TableBody = field(default_factory=TableBody)
    footer: TableFooter = field(default_factory=TableFooter)

    def accept(self, visitor: TableVisitor[T]) -> T:
        return visitor.visit_table(self)

    def __iter__(self) -> Iterator[RowGroup]:
        """Yield the non-empty row groups in document order."""
        for group in (self.header, self.body, self.footer):
            if len(group):
                yield group
