from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import Decimal
from enum import Enum
from typing import Any

from ..core.exceptions import ValueNotSupported
from ..core.translation import Translatable, TranslatableMessage, Translator
from ..result.model import Coordinates
from ..table.model import Property
from .base import Stringifier, StringifierAware


class ChainStringifier(Stringifier):
    """Tries each stringifier in order; falls back to the value's type name."""

    def __init__(self, stringifiers: Iterable[Stringifier]):
        self.stringifiers: list[Stringifier] = []
        for stringifier in stringifiers:
            if isinstance(stringifier, StringifierAware):
                stringifier = stringifier.with_stringifier(self)
            self.stringifiers.append(stringifier)

    def to_string(self, value: Any) -> str:
        for stringifier in self.stringifiers:
            try:
                return stringifier.to_string(value)
            except ValueNotSupported:
                continue
        return type(value).__qualname__


class DefaultStringifier(Stringifier):
    def to_string(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, Enum):
            return value.name
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if value is None:
            return "-"
        if type(value).__str__ is not object.__str__:
            return str(value)
        return f"{type(value).__qualname__}:{id(value)}"


class TranslatableStringifier(Stringifier):
    def __init__(self, translator: Translator, locale: str | None = None):
        self.translator = translator
        self.locale = locale

    def to_string(self, value: Any) -> str:
        if isinstance(value, Translatable):
            return value.trans(self.translator, self.locale)
        if value is None:
            return TranslatableMessage("(None)").trans(self.translator, self.locale)
        if isinstance(value, bool):
            message = TranslatableMessage("True" if value else "False")
            return message.trans(self.translator, self.locale)
        raise ValueNotSupported()


class NumberFormatStringifier(Stringifier):
    """Formats numbers with grouped thousands and up to three decimals."""

    def __init__(
        self,
        thousands_separator: str = ",",
        decimal_separator: str = ".",
        max_decimals: int = 3,
    ):
        self.thousands_separator = thousands_separator
        self.decimal_separator = decimal_separator
        self.max_decimals = max_decimals

    def to_string(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueNotSupported()
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueNotSupported()

        if isinstance(value, int):
            text = f"{value:,}"
        else:
            text = f"{value:,.{self.max_decimals}f}"
            if "." in text:
                text = text.rstrip("0").rstrip(".")
            if text in ("-0", ""):
                text = "0"

        return (
            text.replace(",", "\0")
            .replace(".", self.decimal_separator)
            .replace("\0", self.thousands_separator)
        )


class CoordinatesStringifier(Stringifier):
    """Renders coordinates as an empty string. Register a custom stringifier to show them."""

    def to_string(self, value: Any) -> str:
        if isinstance(value, Coordinates):
            return ""
        raise ValueNotSupported()


class PropertyStringifier(Stringifier, StringifierAware):
    def __init__(self, stringifier: Stringifier | None = None):
        self.stringifier = stringifier

    def with_stringifier(self, stringifier: Stringifier) -> PropertyStringifier:
        if self.stringifier is stringifier:
            return self
        return PropertyStringifier(stringifier)

    def to_string(self, value: Any) -> str:
        if not isinstance(value, Property):
            raise ValueNotSupported()
        if self.stringifier is None:
            raise RuntimeError("Stringifier is not set.")
        return self.stringifier.to_string(value.content)
