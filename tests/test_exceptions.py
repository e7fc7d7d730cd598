"""Tests for the error taxonomy and user-facing wrapping."""

from __future__ import annotations

import pytest

from analytics_frontend.core.exceptions import (
    GENERIC_ERROR_MESSAGE,
    AnalyticsFrontendError,
    FrontendWrapperError,
    HtmlifierFailure,
    NumberifierFailure,
    StringifierFailure,
    UnsupportedData,
    selectively_wrapped,
)
from analytics_frontend.core.translation import (
    NullTranslator,
    Translatable,
    TranslatableMessage,
)


class UpperTranslator:
    def translate(self, message, parameters=None, locale=None):
        return NullTranslator().translate(message.upper(), parameters, locale)


class QuotaError(Exception):
    """Translatable without carrying a TranslatableMessage."""

    def trans(self, translator, locale=None):
        return translator.translate("Quota exceeded", None, locale)


class TestTranslatableErrors:
    def test_message_parameters(self) -> None:
        error = UnsupportedData('Unknown dimension "{name}"', name="city")

        assert str(error) == 'Unknown dimension "city"'
        assert error.translatable == TranslatableMessage(
            'Unknown dimension "{name}"', {"name": "city"}
        )
        assert isinstance(error, Translatable)

    def test_trans_uses_translator(self) -> None:
        error = UnsupportedData("Result is empty")
        assert error.trans(UpperTranslator()) == "RESULT IS EMPTY"

    def test_missing_parameter_keeps_message(self) -> None:
        assert str(AnalyticsFrontendError("Unknown {name}")) == "Unknown {name}"

    @pytest.mark.parametrize(
        "failure, name",
        [
            (StringifierFailure, "Stringifier"),
            (NumberifierFailure, "Numberifier"),
            (HtmlifierFailure, "Htmlifier"),
        ],
    )
    def test_formatter_failures_name_the_type(self, failure, name: str) -> None:
        error = failure(object())
        assert '"object"' in str(error)
        assert f"custom {name} implementation" in str(error)
        assert not isinstance(error, Translatable)


class TestFrontendWrapperError:
    def test_wrap_keeps_translatable_message(self) -> None:
        previous = UnsupportedData("Only one measure is supported")
        wrapped = FrontendWrapperError.wrap(previous)

        assert str(wrapped) == "Only one measure is supported"
        assert wrapped.previous is previous
        assert wrapped.__cause__ is previous

    def test_wrap_delegates_translation(self) -> None:
        wrapped = FrontendWrapperError.wrap(QuotaError("internal detail"))

        assert str(wrapped) == "Quota exceeded"
        assert wrapped.trans(UpperTranslator()) == "QUOTA EXCEEDED"
        assert wrapped.translatable is wrapped.previous

    def test_wrap_hides_internal_message(self) -> None:
        wrapped = FrontendWrapperError.wrap(KeyError("secret"))
        assert str(wrapped) == GENERIC_ERROR_MESSAGE

    def test_selective_wrap(self) -> None:
        internal = RuntimeError("boom")
        assert FrontendWrapperError.selective_wrap(internal) is internal

        wrapped = FrontendWrapperError.wrap(internal)
        assert FrontendWrapperError.selective_wrap(wrapped) is wrapped

        translatable = UnsupportedData("Result is empty")
        assert isinstance(FrontendWrapperError.selective_wrap(translatable), FrontendWrapperError)


class TestSelectivelyWrapped:
    def test_translatable_errors_are_wrapped(self) -> None:
        with pytest.raises(FrontendWrapperError) as exc_info:
            with selectively_wrapped():
                raise UnsupportedData("Result is empty")
        assert isinstance(exc_info.value.__cause__, UnsupportedData)

    def test_other_errors_pass_through(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            with selectively_wrapped():
                raise ValueError("boom")

    def test_no_error(self) -> None:
        with selectively_wrapped():
            value = 1
        assert value == 1
