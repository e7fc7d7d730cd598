"""Load query results from JSON or YAML documents.

Document layout::

    dimensions:
      - {name: month, label: Month, type: month}
      - {name: country, label: Country}
    measures:
      - {name: revenue, label: Revenue, unit: {label: USD, signature: "currency:USD"},
         aggregation: sum}
    rows:
      - {month: "2024-01", country: ID, revenue: 1200}

Dimensions typed ``year``, ``month`` or ``day`` get sequence members, which
lets the chart generator detect time series. A measure's optional ``aggregation``
(sum, min, max or count) enables pivot table subtotals.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import yaml

from ..core.enums import Aggregation
from ..core.exceptions import UnsupportedData
from ..core.logging_config import get_logger
from .model import Day, DimensionField, MeasureField, Month, Result, Unit, Year

logger = get_logger(__name__)

MEMBER_PARSERS: dict[str, Callable[[Any], Any]] = {
    "year": lambda v: Year(int(v)),
    "month": lambda v: Month.parse(str(v)),
    "day": lambda v: Day.parse(str(v)),
}


def load_result(path: str | Path) -> Result:
    """Read a result document from disk.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Parsed Result

    Raises:
        FileNotFoundError: If the file does not exist
        UnsupportedData: If the document structure is invalid
    """
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text) or {}

    result = result_from_dict(data)
    logger.debug(
        "Loaded result document",
        extra={
            "path": str(p),
            "dimensions": len(result.dimensions),
            "measures": len(result.measures),
            "rows": len(result.table),
        },
    )
    return result


def _field_name(entry: Any, kind: str) -> str:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise UnsupportedData("Every {kind} needs a name", kind=kind)
    return str(entry["name"])


def _parse_member(parse: Callable[[Any], Any], value: Any, name: str) -> Any:
    try:
        return parse(value)
    except (TypeError, ValueError) as e:
        raise UnsupportedData(
            'Invalid member "{member}" for dimension "{name}"',
            member=value,
            name=name,
        ) from e


def _aggregation(value: Any, name: str) -> Aggregation | None:
    if value is None:
        return None
    try:
        return Aggregation(str(value).lower())
    except ValueError as e:
        raise UnsupportedData(
            'Unknown aggregation "{aggregation}" for measure "{name}"',
            aggregation=value,
            name=name,
        ) from e


def result_from_dict(data: dict[str, Any]) -> Result:
    if not isinstance(data, dict):
        raise UnsupportedData("Result document must be a mapping")

    dimensions: list[DimensionField] = []
    parsers: dict[str, Callable[[Any], Any]] = {}
    for entry in data.get("dimensions", []):
        name = _field_name(entry, "dimension")
        dimensions.append(DimensionField(name=name, label=entry.get("label", name)))
        member_type = entry.get("type")
        if member_type:
            if member_type not in MEMBER_PARSERS:
                raise UnsupportedData(
                    'Unknown dimension type "{type}"', type=member_type
                )
            parsers[name] = MEMBER_PARSERS[member_type]

    measures: list[MeasureField] = []
    for entry in data.get("measures", []):
        name = _field_name(entry, "measure")
        unit_cfg = entry.get("unit")
        unit = None
        if isinstance(unit_cfg, dict):
            unit = Unit(
                label=unit_cfg.get("label", ""),
                signature=str(unit_cfg.get("signature", unit_cfg.get("label", ""))),
            )
        elif unit_cfg:
            unit = Unit(label=str(unit_cfg), signature=str(unit_cfg))
        measures.append(
            MeasureField(
                name=name,
                label=entry.get("label", name),
                unit=unit,
                aggregation=_aggregation(entry.get("aggregation"), name),
            )
        )

    records = []
    for raw in data.get("rows", []):
        if not isinstance(raw, dict):
            raise UnsupportedData("Every row must be a mapping of names to values")
        record = dict(raw)
        for name, parse in parsers.items():
            if name in record and record[name] is not None:
                record[name] = _parse_member(parse, record[name], name)
        records.append(record)

    # Display maps are keyed by raw members, so parse their keys the same way
    display_members: dict[str, dict[Any, Any]] = {}
    for name, mapping in (data.get("display_members") or {}).items():
        if not isinstance(mapping, dict):
            raise UnsupportedData(
                'Display members of "{name}" must be a mapping', name=name
            )
        parse = parsers.get(name)
        display_members[name] = {
            (_parse_member(parse, k, name) if parse else k): v
            for k, v in mapping.items()
        }

    return Result.from_records(
        dimensions, measures, records, display_members=display_members
    )
