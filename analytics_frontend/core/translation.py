"""Translation seams.

Message catalogues live in the host application. This module only defines
the shape of a translatable message and of the translator that resolves it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


class Translator(Protocol):
    def translate(
        self,
        message: str,
        parameters: dict[str, Any] | None = None,
        locale: str | None = None,
    ) -> str: ...


@runtime_checkable
class Translatable(Protocol):
    def trans(self, translator: Translator, locale: str | None = None) -> str: ...


class NullTranslator:
    """Returns messages untranslated, with ``{placeholder}`` parameters applied."""

    def translate(
        self,
        message: str,
        parameters: dict[str, Any] | None = None,
        locale: str | None = None,
    ) -> str:
        if not parameters:
            return message
        try:
            return message.format(**parameters)
        except (KeyError, IndexError, ValueError):
            return message


@dataclass(frozen=True)
class TranslatableMessage:
    message: str
    parameters: dict[str, Any] = field(default_factory=dict)

    def trans(self, translator: Translator, locale: str | None = None) -> str:
        return translator.translate(self.message, self.parameters, locale)

    def __str__(self) -> str:
        return self.trans(NullTranslator())
