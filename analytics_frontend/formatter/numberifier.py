from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from enum import Enum
from typing import Any

from ..core.exceptions import NumberifierFailure, ValueNotSupported
from ..result.model import Coordinates
from ..table.model import Property
from .base import Numberifier, NumberifierAware


class ChainNumberifier(Numberifier):
    """Tries each numberifier in order; raises NumberifierFailure when none applies."""

    def __init__(self, numberifiers: Iterable[Numberifier]):
        self.numberifiers: list[Numberifier] = []
        for numberifier in numberifiers:
            if isinstance(numberifier, NumberifierAware):
                numberifier = numberifier.with_numberifier(self)
            self.numberifiers.append(numberifier)

    def to_number(self, value: Any) -> int | float:
        for numberifier in self.numberifiers:
            try:
                return numberifier.to_number(value)
            except ValueNotSupported:
                continue
        raise NumberifierFailure(value)


class DefaultNumberifier(Numberifier):
    def to_number(self, value: Any) -> int | float:
        if isinstance(value, bool):
            raise ValueNotSupported()
        if isinstance(value, (int, float)):
            return value
        if value is None:
            return 0
        if isinstance(value, Decimal):
            return float(value)
        if isinstance(value, Enum):
            value = value.value
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return value
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                raise ValueNotSupported() from None
        raise ValueNotSupported()


class CoordinatesNumberifier(Numberifier):
    def to_number(self, value: Any) -> int:
        if not isinstance(value, Coordinates):
            raise ValueNotSupported()
        return 0


class PropertyNumberifier(Numberifier, NumberifierAware):
    def __init__(self, numberifier: Numberifier | None = None):
        self.numberifier = numberifier

    def with_numberifier(self, numberifier: Numberifier) -> PropertyNumberifier:
        if self.numberifier is numberifier:
            return self
        return PropertyNumberifier(numberifier)

    def to_number(self, value: Any) -> int | float:
        if not isinstance(value, Property):
            raise ValueNotSupported()
        if self.numberifier is None:
            raise RuntimeError("Numberifier is not set.")
        return self.numberifier.to_number(value.content)
