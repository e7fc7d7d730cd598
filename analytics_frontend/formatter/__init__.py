"""Formatter chains: convert arbitrary values to strings, numbers, spreadsheet cells and HTML.

Each chain is an ordered list of type-specific converters. A converter either
produces a result or raises ``ValueNotSupported``, and the chain moves on to
the next one. Every chain ends in a fallback, so only a programming error
escapes it.

Usage:
    from analytics_frontend.formatter import create_formatters

    formatters = create_formatters()
    formatters.stringifier.to_string(1234.5)   # "1,234.5"
    formatters.numberifier.to_number("12")     # 12.0
    formatters.htmlifier.to_html("<b>")        # "&lt;b&gt;"
"""

from .base import (
    Cellifier,
    CellifierAware,
    CellProperties,
    Htmlifier,
    HtmlifierAware,
    Numberifier,
    NumberifierAware,
    Stringifier,
    StringifierAware,
)
from .cellifier import ChainCellifier, DefaultCellifier, NumericCellifier, PropertyCellifier
from .factory import Formatters, create_formatters
from .htmlifier import ChainHtmlifier, PropertyHtmlifier
from .numberifier import ChainNumberifier, CoordinatesNumberifier, DefaultNumberifier, PropertyNumberifier
from .stringifier import (
    ChainStringifier,
    CoordinatesStringifier,
    DefaultStringifier,
    NumberFormatStringifier,
    PropertyStringifier,
    TranslatableStringifier,
)

__all__ = [
    "CellProperties",
    "Cellifier",
    "CellifierAware",
    "ChainCellifier",
    "ChainHtmlifier",
    "ChainNumberifier",
    "ChainStringifier",
    "CoordinatesNumberifier",
    "CoordinatesStringifier",
    "DefaultCellifier",
    "DefaultNumberifier",
    "DefaultStringifier",
    "Formatters",
    "Htmlifier",
    "HtmlifierAware",
    "NumberFormatStringifier",
    "Numberifier",
    "NumberifierAware",
    "NumericCellifier",
    "PropertyCellifier",
    "PropertyHtmlifier",
    "PropertyNumberifier",
    "PropertyStringifier",
    "Stringifier",
    "StringifierAware",
    "TranslatableStringifier",
    "create_formatters",
]
