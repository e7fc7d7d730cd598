"""HTML rendering of results and filter expressions.

Main Components:
    - TableRenderer: pivot table or flat table, with fallback in AUTO mode
    - HtmlRendererVisitor: renders the table model through a Jinja2 theme
    - PredicateRenderer / ExpressionRenderer: filter expressions as HTML
    - create_environment: Jinja2 environment with the formatter filters

Themes live in ``templates/``. A theme is a template defining the macros
``table``, ``thead``, ``tbody``, ``tfoot``, ``tr``, ``th``, ``td``, ``tf``,
``label``, ``member`` and ``value``.
"""

from .expression import Comparison, CompositeExpression, ExpressionRenderer, PredicateRenderer
from .renderer import HtmlRendererVisitor, TableRenderer, create_environment

__all__ = [
    "Comparison",
    "CompositeExpression",
    "ExpressionRenderer",
    "HtmlRendererVisitor",
    "PredicateRenderer",
    "TableRenderer",
    "create_environment",
]
