from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from markupsafe import escape

from ..core.exceptions import HtmlifierFailure, StringifierFailure, ValueNotSupported
from ..table.model import Property
from .base import Htmlifier, HtmlifierAware, Stringifier


class ChainHtmlifier(Htmlifier):
    """Tries each htmlifier in order; falls back to the escaped string form."""

    def __init__(self, htmlifiers: Iterable[Htmlifier], stringifier: Stringifier):
        self.stringifier = stringifier
        self.htmlifiers: list[Htmlifier] = []
        for htmlifier in htmlifiers:
            if isinstance(htmlifier, HtmlifierAware):
                htmlifier = htmlifier.with_htmlifier(self)
            self.htmlifiers.append(htmlifier)

    def to_html(self, value: Any) -> str:
        for htmlifier in self.htmlifiers:
            try:
                return htmlifier.to_html(value)
            except ValueNotSupported:
                continue
        try:
            return str(escape(self.stringifier.to_string(value)))
        except StringifierFailure as e:
            raise HtmlifierFailure(value) from e


class PropertyHtmlifier(Htmlifier, HtmlifierAware):
    def __init__(self, htmlifier: Htmlifier | None = None):
        self.htmlifier = htmlifier

    def with_htmlifier(self, htmlifier: Htmlifier) -> PropertyHtmlifier:
        if self.htmlifier is htmlifier:
            return self
        return PropertyHtmlifier(htmlifier)

    def to_html(self, value: Any) -> str:
        if not isinstance(value, Property):
            raise ValueNotSupported()
        if self.htmlifier is None:
            raise RuntimeError("Htmlifier is not set.")
        return self.htmlifier.to_html(value.content)
