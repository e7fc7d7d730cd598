from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from ..core.enums import CellDataType
from ..core.exceptions import ValueNotSupported
from ..table.model import Property
from .base import Cellifier, CellifierAware, CellProperties, Stringifier

INTEGER_FORMAT = "#,##0"
DECIMAL_FORMAT = "#,##0.00"


class ChainCellifier(Cellifier):
    """Tries each cellifier in order; falls back to a string cell."""

    def __init__(self, cellifiers: Iterable[Cellifier], stringifier: Stringifier):
        self.stringifier = stringifier
        self.cellifiers: list[Cellifier] = []
        for cellifier in cellifiers:
            if isinstance(cellifier, CellifierAware):
                cellifier = cellifier.with_cellifier(self)
            self.cellifiers.append(cellifier)

    def to_cell(self, value: Any) -> CellProperties:
        for cellifier in self.cellifiers:
            try:
                return cellifier.to_cell(value)
            except ValueNotSupported:
                continue
        return CellProperties(
            content=self.stringifier.to_string(value),
            type=CellDataType.STRING,
        )


class DefaultCellifier(Cellifier):
    def to_cell(self, value: Any) -> CellProperties:
        if value is None:
            return CellProperties(type=CellDataType.NULL)
        if value is True:
            return CellProperties(content="1", type=CellDataType.BOOL)
        if value is False:
            return CellProperties(content="0", type=CellDataType.BOOL)
        raise ValueNotSupported()


class NumericCellifier(Cellifier):
    """Numbers become numeric cells; integers and decimals get different formats."""

    def to_cell(self, value: Any) -> CellProperties:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueNotSupported()
        if isinstance(value, int):
            return CellProperties(
                content=str(value), type=CellDataType.NUMERIC, format_code=INTEGER_FORMAT
            )
        return CellProperties(
            content=repr(float(value)),
            type=CellDataType.NUMERIC,
            format_code=DECIMAL_FORMAT,
        )


class PropertyCellifier(Cellifier, CellifierAware):
    def __init__(self, cellifier: Cellifier | None = None):
        self.cellifier = cellifier

    def with_cellifier(self, cellifier: Cellifier) -> PropertyCellifier:
        if self.cellifier is cellifier:
            return self
        return PropertyCellifier(cellifier)

    def to_cell(self, value: Any) -> CellProperties:
        if not isinstance(value, Property):
            raise ValueNotSupported()
        if self.cellifier is None:
            raise RuntimeError("Cellifier is not set.")
        return self.cellifier.to_cell(value.content)
