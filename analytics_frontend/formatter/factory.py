from __future__ import annotations

from dataclasses import dataclass

from ..core.config import Settings, get_settings
from ..core.translation import NullTranslator, Translator
from .base import Cellifier, Htmlifier, Numberifier, Stringifier
from .cellifier import ChainCellifier, DefaultCellifier, NumericCellifier, PropertyCellifier
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


@dataclass(frozen=True)
class Formatters:
    stringifier: Stringifier
    numberifier: Numberifier
    cellifier: Cellifier
    htmlifier: Htmlifier


def create_formatters(
    settings: Settings | None = None,
    translator: Translator | None = None,
    extra_stringifiers: list[Stringifier] | None = None,
    extra_htmlifiers: list[Htmlifier] | None = None,
) -> Formatters:
    """Build the default formatter chains.

    Extra formatters are tried before the built-in ones, which is how an
    application teaches the chains about its own value types.
    """
    settings = settings or get_settings()
    translator = translator or NullTranslator()

    stringifier = ChainStringifier(
        [
            *(extra_stringifiers or []),
            PropertyStringifier(),
            TranslatableStringifier(translator, settings.locale),
            CoordinatesStringifier(),
            NumberFormatStringifier(
                thousands_separator=settings.thousands_separator,
                decimal_separator=settings.decimal_separator,
            ),
            DefaultStringifier(),
        ]
    )
    numberifier = ChainNumberifier(
        [PropertyNumberifier(), CoordinatesNumberifier(), DefaultNumberifier()]
    )
    cellifier = ChainCellifier(
        [PropertyCellifier(), DefaultCellifier(), NumericCellifier()],
        stringifier=stringifier,
    )
    htmlifier = ChainHtmlifier(
        [*(extra_htmlifiers or []), PropertyHtmlifier()], stringifier=stringifier
    )
    return Formatters(
        stringifier=stringifier,
        numberifier=numberifier,
        cellifier=cellifier,
        htmlifier=htmlifier,
    )
