"""Turn adapted results into the generic table model.

``transform_tree_to_table`` builds a pivot table: tree levels listed in
``pivoted_nodes`` become column header rows, the remaining levels become
row headers. Row dimensions listed in ``subtotals`` get a "Subtotal" row
after each group of their members; the outermost one goes to the table
footer. ``transform_result_set_to_table`` builds a plain one-row-per-record
table.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, NamedTuple

from ..core.enums import Aggregation
from ..core.exceptions import EmptyResult
from ..core.logging_config import get_logger
from ..core.translation import TranslatableMessage
from ..result.model import aggregate
from .adapter import PivotNode, TableAdapter
from .model import (
    Cell,
    DataCell,
    FooterCell,
    HeaderCell,
    Label,
    Member,
    Row,
    RowGroup,
    Table,
    Value,
)

logger = get_logger(__name__)

VALUE_LEGEND = TranslatableMessage("Value")
SUBTOTAL_LABEL = TranslatableMessage("Subtotal")

RowKey = tuple[Any, ...]


class _Line(NamedTuple):
    """A body or footer row before its cells are laid out.

    A data line holds one row key. A subtotal line holds the keys of the
    group it rolls up, the depth of the subtotalled row level and, when
    measures are row headers, the measure being rolled up.
    """

    keys: tuple[RowKey, ...]
    subtotal_depth: int | None = None
    measure: Any = None


def _leaf_paths(node: PivotNode, path: tuple[PivotNode, ...] = ()) -> Iterator[tuple[PivotNode, ...]]:
    for child in node:
        child_path = (*path, child)
        if child.is_leaf:
            yield child_path
        else:
            yield from _leaf_paths(child, child_path)


def _hierarchical_order(keys: list[RowKey]) -> list[RowKey]:
    """Merge the column keys of every row group into one order.

    Members rank by where they first appear anywhere, so a month missing
    from the first group still lands between its neighbours.
    """
    ranks: list[dict[Any, int]] = []
    for key in keys:
        for depth, member in enumerate(key):
            if depth == len(ranks):
                ranks.append({})
            ranks[depth].setdefault(member, len(ranks[depth]))
    return sorted(keys, key=lambda k: tuple(ranks[d][m] for d, m in enumerate(k)))


def _span(keys: list[RowKey], start: int, depth: int) -> int:
    prefix = keys[start][: depth + 1]
    end = start
    while end < len(keys) and keys[end][: depth + 1] == prefix:
        end += 1
    return end - start


class _RowLayout:
    """Lay out row headers, values and subtotal rows of a pivot table."""

    def __init__(
        self,
        row_levels: list[int],
        values_level: int,
        items: list[dict[Any, Any]],
        values: dict[tuple[RowKey, RowKey], Any],
        column_keys: list[RowKey],
        aggregations: dict[Any, Aggregation | None],
        subtotal_depths: set[int],
    ):
        self.row_levels = row_levels
        self.width = len(row_levels)
        self.measures_in_rows = values_level in row_levels
        self.items = items
        self.values = values
        self.column_keys = column_keys
        self.aggregations = aggregations
        self.subtotal_depths = subtotal_depths

    def lines(self, keys: list[RowKey], depth: int = 0) -> list[_Line]:
        """Data lines in tree order, each group followed by its subtotals."""
        if depth == self.width:
            return [_Line((key,)) for key in keys]

        groups: dict[Any, list[RowKey]] = {}
        for key in keys:
            groups.setdefault(key[depth], []).append(key)

        lines: list[_Line] = []
        for group in groups.values():
            lines.extend(self.lines(group, depth + 1))
        if depth > 0:
            lines.extend(self.subtotal_lines(keys, depth))
        return lines

    def subtotal_lines(self, keys: list[RowKey], depth: int) -> list[_Line]:
        """Subtotal lines rolling up the members at ``depth`` of one group."""
        if depth not in self.subtotal_depths:
            return []
        # A single member would only repeat its own row
        if len({key[depth] for key in keys}) < 2:
            return []

        if self.measures_in_rows:
            measures = dict.fromkeys(key[-1] for key in keys)
            return [
                _Line(tuple(keys), depth, measure)
                for measure in measures
                if self.aggregations.get(measure) is not None
            ]
        if any(a is not None for a in self.aggregations.values()):
            return [_Line(tuple(keys), depth)]
        return []

    def render(self, lines: list[_Line], group: RowGroup) -> None:
        layouts = [self._header_cells(line) for line in lines]
        span_keys = [{cell[0] for cell in layout} for layout in layouts]

        for i, (line, layout) in enumerate(zip(lines, layouts)):
            row = Row()
            for span_key, cell_class, content, col_span in layout:
                if i > 0 and span_key in span_keys[i - 1]:
                    continue
                row_span = 1
                while i + row_span < len(lines) and span_key in span_keys[i + row_span]:
                    row_span += 1
                row.append(cell_class(content, row_span=row_span, col_span=col_span))
            for cell in self._data_cells(line):
                row.append(cell)
            group.append(row)

    def _item(self, depth: int, member: Any) -> Any:
        return self.items[self.row_levels[depth]][member]

    def _header_cells(self, line: _Line) -> list[tuple[Any, type[Cell], Any, int]]:
        # (span key, cell class, content, col_span) per row header position
        if line.subtotal_depth is None:
            key = line.keys[0]
            return [
                (("member", key[: d + 1]), HeaderCell, Member(self._item(d, key[d])), 1)
                for d in range(self.width)
            ]

        depth = line.subtotal_depth
        prefix = line.keys[0][:depth]
        cells: list[tuple[Any, type[Cell], Any, int]] = [
            (("member", prefix[: d + 1]), HeaderCell, Member(self._item(d, prefix[d])), 1)
            for d in range(depth)
        ]
        label_span = self.width - depth - (1 if self.measures_in_rows else 0)
        cells.append((("subtotal", prefix), FooterCell, Label(SUBTOTAL_LABEL), label_span))
        if self.measures_in_rows:
            measure = Member(self._item(self.width - 1, line.measure))
            cells.append((("subtotal", prefix, line.measure), FooterCell, measure, 1))
        return cells

    def _data_cells(self, line: _Line) -> list[Cell]:
        if line.subtotal_depth is None:
            key = line.keys[0]
            return [
                DataCell(Value(self.values[(key, column_key)]))
                if (key, column_key) in self.values
                else DataCell("")
                for column_key in self.column_keys
            ]

        cells: list[Cell] = []
        for column_key in self.column_keys:
            # The values level is the innermost one, on whichever axis it sits
            measure = line.measure if self.measures_in_rows else column_key[-1]
            aggregation = self.aggregations.get(measure)
            total = None
            if aggregation is not None:
                total = aggregate(
                    aggregation,
                    (
                        self.values.get((key, column_key))
                        for key in line.keys
                        if not self.measures_in_rows or key[-1] == measure
                    ),
                )
            cells.append(FooterCell(Value(total)) if total is not None else FooterCell(""))
        return cells


def transform_tree_to_table(
    tree: PivotNode,
    pivoted_nodes: Sequence[str] = ("@values",),
    superfluous_legends: Sequence[str] = ("@values",),
    subtotals: Sequence[str] = (),
) -> Table:
    """Build a pivot table from an adapted result tree.

    Row headers follow the tree order, so any ordering the query applied
    inside a group is kept. Column headers merge the members of all groups.

    Args:
        tree: Root node from PivotTableAdapter.adapt
        pivoted_nodes: Level names rendered as column headers
        superfluous_legends: Level names whose legend is rendered empty
        subtotals: Row level names that get subtotal rows. Only measures
            with an aggregation are rolled up.

    Returns:
        Table with header, body and (for an outermost subtotal) footer
        row groups

    Raises:
        EmptyResult: If the tree has no leaves
    """
    paths = list(_leaf_paths(tree))
    if not paths:
        raise EmptyResult("Result is empty")

    depth = len(paths[0])
    values_level = depth - 1
    legends: list[Any] = [node.legend for node in paths[0]]
    level_keys: list[str | None] = [node.key for node in paths[0]]
    row_levels = [i for i, key in enumerate(level_keys) if key not in pivoted_nodes]
    column_levels = [i for i, key in enumerate(level_keys) if key in pivoted_nodes]

    items: list[dict[Any, Any]] = [{} for _ in range(depth)]
    values: dict[tuple[RowKey, RowKey], Any] = {}
    aggregations: dict[Any, Aggregation | None] = {}
    row_keys: list[RowKey] = []
    column_keys: list[RowKey] = []

    for path in paths:
        for level, node in enumerate(path):
            items[level].setdefault(node.member, node.item)
        aggregations.setdefault(path[-1].member, path[-1].aggregation)
        row_key = tuple(path[i].member for i in row_levels)
        column_key = tuple(path[i].member for i in column_levels)
        if row_key not in row_keys:
            row_keys.append(row_key)
        if column_key not in column_keys:
            column_keys.append(column_key)
        values[(row_key, column_key)] = path[-1].value

    column_keys = _hierarchical_order(column_keys)

    def legend_content(level: int) -> Any:
        if level_keys[level] in superfluous_legends:
            return ""
        return Label(legends[level])

    table = Table()
    corner_width = max(len(row_levels), 1)

    # Header
    if column_levels:
        last = len(column_levels) - 1
        for h, level in enumerate(column_levels):
            header_row = Row()
            if h == last and row_levels:
                for row_level in row_levels:
                    header_row.append(HeaderCell(legend_content(row_level)))
            else:
                header_row.append(HeaderCell(legend_content(level), col_span=corner_width))

            c = 0
            while c < len(column_keys):
                span = _span(column_keys, c, h)
                member = column_keys[c][h]
                header_row.append(HeaderCell(Member(items[level][member]), col_span=span))
                c += span
            table.header.append(header_row)
    else:
        header_row = Row()
        for row_level in row_levels:
            header_row.append(HeaderCell(legend_content(row_level)))
        header_row.append(HeaderCell(Label(VALUE_LEGEND)))
        table.header.append(header_row)

    # Body and footer
    if row_levels:
        layout = _RowLayout(
            row_levels,
            values_level,
            items,
            values,
            column_keys,
            aggregations,
            subtotal_depths={
                d
                for d, level in enumerate(row_levels)
                if level != values_level and level_keys[level] in subtotals
            },
        )
        layout.render(layout.lines(row_keys), table.body)
        layout.render(layout.subtotal_lines(row_keys, 0), table.footer)
    else:
        body_row = Row()
        body_row.append(HeaderCell(""))
        for column_key in column_keys:
            if ((), column_key) in values:
                body_row.append(DataCell(Value(values[((), column_key)])))
            else:
                body_row.append(DataCell(""))
        table.body.append(body_row)

    logger.debug(
        "Pivot table built",
        extra={
            "row_levels": [level_keys[i] for i in row_levels],
            "column_levels": [level_keys[i] for i in column_levels],
            "subtotals": [s for s in subtotals if s in level_keys],
            "rows": len(table.body),
            "columns": len(column_keys),
        },
    )
    return table


def transform_result_set_to_table(adapter: TableAdapter) -> Table:
    """Build a flat table: one header row of legends, one body row per record."""
    table = Table()

    header_row = Row()
    for f in adapter.fields:
        header_row.append(HeaderCell(Label(f.label)))
    table.header.append(header_row)

    for values in adapter.rows():
        body_row = Row()
        for f, value in zip(adapter.fields, values, strict=True):
            body_row.append(DataCell(Value(value) if f.is_measure else Member(value)))
        table.body.append(body_row)

    return table
