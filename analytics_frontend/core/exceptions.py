"""Error taxonomy for analytics-frontend.

Every error raised on purpose by this package derives from
``AnalyticsFrontendError`` and carries a ``TranslatableMessage``, so callers
can show it to users after translation. Anything else that escapes a
renderer is an unexpected failure; ``FrontendWrapperError.wrap`` replaces its
message with a generic, user-safe one.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from .translation import NullTranslator, Translatable, TranslatableMessage, Translator

GENERIC_ERROR_MESSAGE = (
    "An error occurred. Please try again later and contact technical "
    "support if the problem persists."
)


class AnalyticsFrontendError(Exception):
    """Base exception for user-facing, translatable errors."""

    def __init__(self, message: str | Translatable, **parameters: Any) -> None:
        self.translatable: Translatable
        if isinstance(message, str):
            self.translatable = TranslatableMessage(message, parameters)
        else:
            self.translatable = message
        super().__init__(self.translatable.trans(NullTranslator()))

    def trans(self, translator: Translator, locale: str | None = None) -> str:
        return self.translatable.trans(translator, locale)


class UnsupportedData(AnalyticsFrontendError):
    """The result shape does not match any known chart or table layout."""


class EmptyResult(AnalyticsFrontendError):
    """The result has no rows."""


class HierarchicalOrderingRequired(AnalyticsFrontendError):
    """A tree view was requested over rows that are not grouped hierarchically."""


class ValueNotSupported(Exception):
    """Raised by a formatter that cannot handle its input.

    Chains catch it and move on to the next formatter. It is not an error.
    """


class FormatterFailure(Exception):
    """A formatter chain could not convert a value. Indicates a programming error."""

    formatter_name = "formatter"

    def __init__(self, value: Any) -> None:
        self.value = value
        type_name = type(value).__qualname__
        super().__init__(
            f'Unable to transform input value "{type_name}" with the '
            f"{self.formatter_name}. To fix the problem, register a custom "
            f'{self.formatter_name} implementation for "{type_name}".'
        )


class StringifierFailure(FormatterFailure):
    formatter_name = "Stringifier"


class NumberifierFailure(FormatterFailure):
    formatter_name = "Numberifier"


class HtmlifierFailure(FormatterFailure):
    formatter_name = "Htmlifier"


class FrontendWrapperError(AnalyticsFrontendError):
    """User-facing wrapper around another exception.

    If the wrapped exception is translatable, its message is assumed to be
    user-friendly and is kept. Otherwise the generic message is used and the
    original stays reachable through ``__cause__``.
    """

    def __init__(self, previous: BaseException) -> None:
        self.previous = previous
        message: Translatable
        if isinstance(previous, Translatable):
            # translation stays with the wrapped exception
            message = previous
        else:
            message = TranslatableMessage(GENERIC_ERROR_MESSAGE)
        super().__init__(message)
        self.__cause__ = previous

    @classmethod
    def wrap(cls, previous: BaseException) -> FrontendWrapperError:
        return cls(previous)

    @classmethod
    def selective_wrap(cls, previous: BaseException) -> BaseException:
        """Wrap user-friendly exceptions, return anything else as is."""
        if isinstance(previous, FrontendWrapperError):
            return previous
        if isinstance(previous, Translatable):
            return cls(previous)
        return previous


@contextmanager
def selectively_wrapped() -> Iterator[None]:
    """Re-raise translatable errors as FrontendWrapperError, others unchanged."""
    try:
        yield
    except Exception as e:
        wrapped = FrontendWrapperError.selective_wrap(e)
        if wrapped is e:
            raise
        raise wrapped from e
