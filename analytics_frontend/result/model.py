"""Read-only result model consumed by the renderers.

A ``Result`` holds rows of dimension coordinates and measures. It exposes a
flat table view (``Result.table``) and a drill-down tree view
(``Result.tree``) whose last level, ``@values``, holds one leaf per measure.
"""

from __future__ import annotations

import datetime as dt
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, TypeVar

from ..core.enums import Aggregation
from ..core.exceptions import (
    EmptyResult,
    HierarchicalOrderingRequired,
    UnsupportedData,
)
from ..core.translation import TranslatableMessage

VALUES_NODE = "@values"
VALUES_LABEL = TranslatableMessage("Values")

T = TypeVar("T")


class SequenceMember(ABC):
    """A dimension member that belongs to an ordered sequence (years, months, days)."""

    @abstractmethod
    def sort_key(self) -> tuple[int, ...]: ...

    @classmethod
    def compare(cls, a: SequenceMember, b: SequenceMember) -> int:
        ka, kb = a.sort_key(), b.sort_key()
        return (ka > kb) - (ka < kb)


@dataclass(frozen=True)
class Year(SequenceMember):
    year: int

    def sort_key(self) -> tuple[int, ...]:
        return (self.year,)

    def __str__(self) -> str:
        return str(self.year)


@dataclass(frozen=True)
class Month(SequenceMember):
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")

    @classmethod
    def parse(cls, value: str) -> Month:
        year, month = value.split("-", 1)
        return cls(int(year), int(month))

    def sort_key(self) -> tuple[int, ...]:
        return (self.year, self.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class Day(SequenceMember):
    date: dt.date

    @classmethod
    def parse(cls, value: str) -> Day:
        return cls(dt.date.fromisoformat(value))

    def sort_key(self) -> tuple[int, ...]:
        return (self.date.year, self.date.month, self.date.day)

    def __str__(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class Unit:
    label: Any
    signature: str

    def __str__(self) -> str:
        return str(self.label)


@dataclass(frozen=True)
class Measure:
    name: str
    label: Any
    value: Any
    unit: Unit | None = None
    aggregation: Aggregation | None = None


def aggregate(aggregation: Aggregation, values: Iterable[Any]) -> Any:
    """Roll measure values up into one subtotal value.

    ``None`` values are skipped. Sums, minima and maxima only consider
    numbers; they return ``None`` when there is nothing to roll up.
    """
    present = [v for v in values if v is not None]
    if aggregation is Aggregation.COUNT:
        return len(present)

    numbers = [
        v
        for v in present
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool)
    ]
    if not numbers:
        return None
    if aggregation is Aggregation.SUM:
        return sum(numbers)
    if aggregation is Aggregation.MIN:
        return min(numbers)
    return max(numbers)


class Measures:
    """Ordered, name-addressable collection of measures."""

    def __init__(self, measures: Iterable[Measure]):
        self._measures = list(measures)

    def by_name(self, name: str) -> Measure | None:
        for measure in self._measures:
            if measure.name == name:
                return measure
        return None

    def by_index(self, index: int) -> Measure | None:
        try:
            return self._measures[index]
        except IndexError:
            return None

    def names(self) -> list[str]:
        return [m.name for m in self._measures]

    def __iter__(self) -> Iterator[Measure]:
        return iter(self._measures)

    def __len__(self) -> int:
        return len(self._measures)


@dataclass(frozen=True)
class Dimension:
    name: str
    label: Any
    member: Any
    display_member: Any = None

    def __post_init__(self) -> None:
        if self.display_member is None:
            object.__setattr__(self, "display_member", self.member)


@dataclass(frozen=True)
class Coordinates:
    """The position of a row in the cube: its dimensions, without measures."""

    dimensions: tuple[Dimension, ...]

    def members(self) -> dict[str, Any]:
        return {d.name: d.member for d in self.dimensions}


class Row:
    def __init__(self, dimensions: Sequence[Dimension], measures: Measures):
        self._dimensions = tuple(dimensions)
        self.measures = measures

    def by_index(self, index: int) -> Dimension | None:
        try:
            return self._dimensions[index]
        except IndexError:
            return None

    def by_name(self, name: str) -> Dimension | None:
        for dimension in self._dimensions:
            if dimension.name == name:
                return dimension
        return None

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self._dimensions)

    def __iter__(self) -> Iterator[Dimension]:
        return iter(self._dimensions)

    def __len__(self) -> int:
        return len(self._dimensions)


class ResultTable:
    def __init__(self, rows: Sequence[Row]):
        self._rows = list(rows)

    @property
    def row_prototype(self) -> Row:
        if not self._rows:
            raise EmptyResult("Result is empty")
        return self._rows[0]

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)


@dataclass(eq=False)
class TreeNode:
    """A node of the drill-down tree. Iterating a node yields its children."""

    name: str | None
    label: Any
    member: Any
    display_member: Any = None
    measure: Measure | None = None
    children: list[TreeNode] = field(default_factory=list)

    def traverse(self, member: Any) -> TreeNode | None:
        for child in self.children:
            if child.member == member:
                return child
        return None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)


def group_by_prefix(items: Sequence[T], key: Callable[[T], Sequence[Any]]) -> list[T]:
    """Reorder items so those sharing a key prefix are contiguous.

    Within each group, members keep the order they first appear in, so an
    order the query imposed inside one parent (products by revenue within a
    country, say) survives regrouping.
    """
    if not items:
        return []
    return _group(list(items), key, 0, len(key(items[0])))


def _group(
    items: list[T], key: Callable[[T], Sequence[Any]], depth: int, width: int
) -> list[T]:
    if depth >= width or len(items) < 2:
        return items
    groups: dict[Any, list[T]] = {}
    for item in items:
        groups.setdefault(key(item)[depth], []).append(item)
    return [
        grouped
        for group in groups.values()
        for grouped in _group(group, key, depth + 1, width)
    ]


@dataclass(frozen=True)
class DimensionField:
    name: str
    label: Any


@dataclass(frozen=True)
class MeasureField:
    name: str
    label: Any
    unit: Unit | None = None
    aggregation: Aggregation | None = None


class Result:
    """An immutable query result with table and tree views."""

    def __init__(
        self,
        dimensions: Sequence[DimensionField],
        measures: Sequence[MeasureField],
        rows: Sequence[Row],
    ):
        self.dimensions = list(dimensions)
        self.measures = list(measures)
        self._table = ResultTable(rows)
        self._tree: TreeNode | None = None

    @classmethod
    def from_records(
        cls,
        dimensions: Sequence[DimensionField],
        measures: Sequence[MeasureField],
        records: Iterable[Mapping[str, Any]],
        display_members: Mapping[str, Mapping[Any, Any]] | None = None,
    ) -> Result:
        """Build a result from flat records keyed by dimension and measure names.

        Args:
            dimensions: Dimension fields, in drill-down order
            measures: Measure fields, in display order
            records: One mapping per row; missing measures become None
            display_members: Optional per-dimension map from member to display value

        Returns:
            Result instance
        """
        display_members = display_members or {}
        rows = []
        for record in records:
            row_dimensions = []
            for d in dimensions:
                if d.name not in record:
                    raise UnsupportedData(
                        'Row is missing dimension "{name}"', name=d.name
                    )
                member = record[d.name]
                row_dimensions.append(
                    Dimension(
                        name=d.name,
                        label=d.label,
                        member=member,
                        display_member=display_members.get(d.name, {}).get(member),
                    )
                )
            row_measures = Measures(
                Measure(
                    name=m.name,
                    label=m.label,
                    value=record.get(m.name),
                    unit=m.unit,
                    aggregation=m.aggregation,
                )
                for m in measures
            )
            rows.append(Row(row_dimensions, row_measures))
        return cls(dimensions, measures, rows)

    @property
    def table(self) -> ResultTable:
        return self._table

    @property
    def tree(self) -> TreeNode:
        if self._tree is None:
            self._tree = self._build_tree()
        return self._tree

    def dimension_label(self, name: str) -> Any:
        for d in self.dimensions:
            if d.name == name:
                return d.label
        raise KeyError(name)

    def measure_label(self, name: str) -> Any:
        for m in self.measures:
            if m.name == name:
                return m.label
        raise KeyError(name)

    def select(
        self,
        dimensions: Sequence[str] | None = None,
        measures: Sequence[str] | None = None,
    ) -> Result:
        """Return a result with the given dimensions and measures, in that order.

        Rows are regrouped so that rows sharing a dimension prefix are
        contiguous. Inside each group rows keep their original order.

        Raises:
            UnsupportedData: If a name is unknown, or if dropping dimensions
                would merge rows
        """
        fields_by_name = {d.name: d for d in self.dimensions}
        measures_by_name = {m.name: m for m in self.measures}
        dimension_names = list(fields_by_name if dimensions is None else dimensions)
        measure_names = list(measures_by_name if measures is None else measures)

        for name in dimension_names:
            if name not in fields_by_name:
                raise UnsupportedData('Unknown dimension "{name}"', name=name)
        for name in measure_names:
            if name not in measures_by_name:
                raise UnsupportedData('Unknown measure "{name}"', name=name)
        if sorted(dimension_names) != sorted(fields_by_name):
            raise UnsupportedData("Every dimension must be selected exactly once")

        keyed_rows = []
        for row in self._table:
            row_dimensions = [row.by_name(name) for name in dimension_names]
            row_measures = Measures(
                row.measures.by_name(name)
                or Measure(
                    name=name,
                    label=measures_by_name[name].label,
                    value=None,
                    unit=measures_by_name[name].unit,
                    aggregation=measures_by_name[name].aggregation,
                )
                for name in measure_names
            )
            keyed_rows.append((row_dimensions, Row(row_dimensions, row_measures)))

        keyed_rows = group_by_prefix(
            keyed_rows, lambda item: [d.member for d in item[0]]
        )

        return Result(
            [fields_by_name[name] for name in dimension_names],
            [measures_by_name[name] for name in measure_names],
            [row for _, row in keyed_rows],
        )

    def _build_tree(self) -> TreeNode:
        root = TreeNode(name=None, label=None, member=None)

        for row in self._table:
            node = root
            for dimension in row:
                last = node.children[-1] if node.children else None
                if last is not None and last.member == dimension.member:
                    node = last
                    continue
                if node.traverse(dimension.member) is not None:
                    raise HierarchicalOrderingRequired(
                        "Rows must be ordered hierarchically to build a tree"
                    )
                child = TreeNode(
                    name=dimension.name,
                    label=dimension.label,
                    member=dimension.member,
                    display_member=dimension.display_member,
                )
                node.children.append(child)
                node = child

            if node.children:
                raise UnsupportedData("Result contains duplicate coordinates")

            for measure in row.measures:
                node.children.append(
                    TreeNode(
                        name=VALUES_NODE,
                        label=VALUES_LABEL,
                        member=measure.name,
                        display_member=measure.label,
                        measure=measure,
                    )
                )

        return root
