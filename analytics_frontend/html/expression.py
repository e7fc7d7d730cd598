"""Render filter expressions (the "where" part of a query) as HTML fragments.

Example:
    predicate = CompositeExpression.and_(
        Comparison("country", Comparison.IN, ["ID", "MY"]),
        Comparison("year", Comparison.GTE, 2023),
    )
    PredicateRenderer(result).render_predicate(predicate)
    # ['<u>Country</u> ∈ (ID, MY)', '<u>Year</u> ≥ 2,023']
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup

from ..core.exceptions import selectively_wrapped
from ..core.translation import TranslatableMessage
from ..formatter.base import Htmlifier
from ..formatter.factory import create_formatters
from ..result.model import Result

OPERATOR_SYMBOLS = {
    "=": "=",
    "<>": "≠",
    "<": "<",
    "<=": "≤",
    ">": ">",
    ">=": "≥",
    "IN": "∈",
    "NIN": "∉",
}


@dataclass(frozen=True)
class Comparison:
    EQ = "="
    NEQ = "<>"
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    IN = "IN"
    NIN = "NIN"

    field: str
    operator: str
    value: Any


@dataclass(frozen=True)
class CompositeExpression:
    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    type: str
    expressions: Sequence[Comparison | CompositeExpression]

    @classmethod
    def and_(cls, *expressions: Comparison | CompositeExpression) -> CompositeExpression:
        return cls(cls.AND, expressions)

    @classmethod
    def or_(cls, *expressions: Comparison | CompositeExpression) -> CompositeExpression:
        return cls(cls.OR, expressions)

    @classmethod
    def not_(cls, expression: Comparison | CompositeExpression) -> CompositeExpression:
        return cls(cls.NOT, (expression,))


class ExpressionRenderer:
    """Walk an expression tree and render it as an HTML fragment.

    Args:
        htmlifier: Converts labels, values and keywords to HTML
        field_label: Maps a field name to its label
    """

    def __init__(self, htmlifier: Htmlifier, field_label: Callable[[str], Any]):
        self.htmlifier = htmlifier
        self.field_label = field_label

    def render(self, expression: Comparison | CompositeExpression) -> Markup:
        if isinstance(expression, Comparison):
            return self.render_comparison(expression)
        if isinstance(expression, CompositeExpression):
            return self.render_composite(expression)
        raise TypeError(f"Unsupported expression: {type(expression).__qualname__}")

    def render_comparison(self, comparison: Comparison) -> Markup:
        return Markup("{} {} {}").format(
            self.render_field(comparison.field),
            self.render_operator(comparison.operator),
            self.render_value(comparison.value),
        )

    def render_composite(self, expression: CompositeExpression) -> Markup:
        parts = [self.render(part) for part in expression.expressions]
        keyword = self.render_keyword(expression.type)

        if expression.type == CompositeExpression.NOT:
            return Markup("{} {}").format(keyword, Markup(" ").join(parts))

        if len(parts) == 1:
            return parts[0]

        return Markup("({})").format(Markup(f" {keyword} ").join(parts))

    def render_field(self, field: str) -> Markup:
        return Markup("<u>{}</u>").format(Markup(self.htmlifier.to_html(self.field_label(field))))

    def render_value(self, value: Any) -> Markup:
        if isinstance(value, (list, tuple, set, frozenset)):
            return Markup("({})").format(
                Markup(", ").join(self.render_value(part) for part in value)
            )
        return Markup(self.htmlifier.to_html(value))

    @staticmethod
    def render_operator(operator: str) -> str:
        try:
            return OPERATOR_SYMBOLS[operator]
        except KeyError:
            raise ValueError(f"Unsupported operator: {operator}") from None

    def render_keyword(self, type_: str) -> Markup:
        if type_ not in (CompositeExpression.AND, CompositeExpression.OR, CompositeExpression.NOT):
            raise ValueError(f"Unsupported composite expression type: {type_}")
        return Markup(self.htmlifier.to_html(TranslatableMessage(type_)))


class PredicateRenderer:
    """Render the top-level AND terms of a predicate, one fragment per term."""

    def __init__(self, result: Result, htmlifier: Htmlifier | None = None):
        self.result = result
        self.htmlifier = htmlifier or create_formatters().htmlifier

    def render_predicate(self, predicate: CompositeExpression | None) -> list[Markup]:
        with selectively_wrapped():
            if predicate is None:
                return []

            if not isinstance(predicate, CompositeExpression):
                raise ValueError(
                    f"Expected CompositeExpression, got: {type(predicate).__qualname__}"
                )
            if predicate.type != CompositeExpression.AND:
                raise ValueError(f"Expected AND CompositeExpression, got: {predicate.type}")

            renderer = ExpressionRenderer(self.htmlifier, self.result.dimension_label)
            return [renderer.render(expression) for expression in predicate.expressions]
