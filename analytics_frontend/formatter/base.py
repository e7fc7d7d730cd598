"""Formatter interfaces.

A formatter converts an arbitrary value into one output form. Formatters that
cannot handle a value raise ``ValueNotSupported`` so that a chain can try the
next one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from markupsafe import escape

from ..core.enums import CellDataType


@dataclass(frozen=True)
class CellProperties:
    """Content and type of a spreadsheet cell.

    Rendered as ``data-*`` attributes when a table is emitted as HTML.
    """

    content: str = ""
    type: CellDataType = CellDataType.STRING
    format_code: str | None = None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        yield "data-type", self.type.value
        if self.format_code is not None:
            yield "data-format", self.format_code

    def html_attributes(self) -> str:
        return " ".join(f'{key}="{escape(value)}"' for key, value in self)


class Stringifier(ABC):
    @abstractmethod
    def to_string(self, value: Any) -> str: ...


class Numberifier(ABC):
    @abstractmethod
    def to_number(self, value: Any) -> int | float: ...


class Cellifier(ABC):
    @abstractmethod
    def to_cell(self, value: Any) -> CellProperties: ...


class Htmlifier(ABC):
    @abstractmethod
    def to_html(self, value: Any) -> str: ...


class StringifierAware(ABC):
    """Formatters that delegate back to the chain that contains them."""

    @abstractmethod
    def with_stringifier(self, stringifier: Stringifier) -> Stringifier: ...


class NumberifierAware(ABC):
    @abstractmethod
    def with_numberifier(self, numberifier: Numberifier) -> Numberifier: ...


class CellifierAware(ABC):
    @abstractmethod
    def with_cellifier(self, cellifier: Cellifier) -> Cellifier: ...


class HtmlifierAware(ABC):
    @abstractmethod
    def with_htmlifier(self, htmlifier: Htmlifier) -> Htmlifier: ...
