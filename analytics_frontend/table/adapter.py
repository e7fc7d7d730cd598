"""Adapters from the result model to the shapes the table transformers walk."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..core.enums import Aggregation
from ..core.exceptions import UnsupportedData
from ..result.model import Result, TreeNode


@dataclass
class PivotNode:
    """A tree node reduced to what a pivot table needs."""

    key: str | None
    legend: Any
    member: Any
    item: Any
    value: Any = None
    aggregation: Aggregation | None = None
    children: list[PivotNode] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __iter__(self) -> Iterator[PivotNode]:
        return iter(self.children)


class PivotTableAdapter:
    @staticmethod
    def adapt(tree: TreeNode) -> PivotNode:
        return PivotNode(
            key=tree.name,
            legend=tree.label,
            member=tree.member,
            item=tree.display_member,
            value=tree.measure.value if tree.measure is not None else None,
            aggregation=tree.measure.aggregation if tree.measure is not None else None,
            children=[PivotTableAdapter.adapt(child) for child in tree],
        )


@dataclass(frozen=True)
class TableField:
    name: str
    label: Any
    is_measure: bool = False


class TableAdapter:
    """Flat view of a result restricted to some dimensions and measures.

    Args:
        result: Source result
        dimensions: Dimension names to include (default: all, in result order)
        measures: Measure names to include (default: all, in result order)
    """

    def __init__(
        self,
        result: Result,
        dimensions: Sequence[str] | None = None,
        measures: Sequence[str] | None = None,
    ):
        known_dimensions = [d.name for d in result.dimensions]
        known_measures = [m.name for m in result.measures]
        dimensions = list(known_dimensions if dimensions is None else dimensions)
        measures = list(known_measures if measures is None else measures)

        for name in dimensions:
            if name not in known_dimensions:
                raise UnsupportedData('Unknown dimension "{name}"', name=name)
        for name in measures:
            if name not in known_measures:
                raise UnsupportedData('Unknown measure "{name}"', name=name)

        self.result = result
        self.fields = [
            TableField(name, result.dimension_label(name)) for name in dimensions
        ] + [
            TableField(name, result.measure_label(name), is_measure=True)
            for name in measures
        ]

    def rows(self) -> Iterator[list[Any]]:
        """Yield one list per result row: display members, then measure values."""
        for row in self.result.table:
            values: list[Any] = []
            for f in self.fields:
                if f.is_measure:
                    measure = row.measures.by_name(f.name)
                    values.append(measure.value if measure is not None else None)
                else:
                    dimension = row.by_name(f.name)
                    values.append(
                        dimension.display_member if dimension is not None else None
                    )
            yield values
