from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound
from markupsafe import Markup

from ..core.config import Settings, get_settings
from ..core.enums import OutputType
from ..core.exceptions import (
    EmptyResult,
    HierarchicalOrderingRequired,
    UnsupportedData,
    selectively_wrapped,
)
from ..core.logging_config import get_logger
from ..formatter.factory import Formatters, create_formatters
from ..result.model import VALUES_NODE, Result
from ..table.adapter import PivotTableAdapter, TableAdapter
from ..table.model import (
    Cell,
    DataCell,
    FooterCell,
    HeaderCell,
    Label,
    Member,
    Property,
    Row,
    Table,
    TableBody,
    TableFooter,
    TableHeader,
    TableVisitor,
    Value,
)
from ..table.transformer import transform_result_set_to_table, transform_tree_to_table

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def create_environment(
    formatters: Formatters | None = None, templates_dir: Path | None = None
) -> Environment:
    """Create the Jinja2 environment used by the HTML renderers.

    Registers the ``analytics_to_html`` and ``analytics_to_string`` filters,
    which run values through the formatter chains.

    Args:
        formatters: Formatter chains (default: create_formatters())
        templates_dir: Directory holding the themes (default: bundled templates)

    Returns:
        Configured Jinja2 Environment
    """
    formatters = formatters or create_formatters()
    if templates_dir is None:
        templates_dir = TEMPLATES_DIR

    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=lambda name: name is not None and name.endswith(".html.j2"),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["analytics_to_html"] = lambda value: Markup(
        formatters.htmlifier.to_html(value)
    )
    env.filters["analytics_to_string"] = formatters.stringifier.to_string
    env.globals["analytics_formatters"] = formatters
    return env


class HtmlRendererVisitor(TableVisitor[Markup]):
    """Render a table element by element through the macros of a theme."""

    def __init__(self, environment: Environment, theme: str, formatters: Formatters):
        try:
            self.template = environment.get_template(theme).module
        except TemplateNotFound as e:
            logger.error("HTML theme not found", extra={"theme": theme})
            raise RuntimeError(f"HTML theme not found: {e}") from e
        self.formatters = formatters

    def _render_children(self, element: Iterable[Any]) -> list[Markup]:
        return [child.accept(self) for child in element]

    def _render_cell(self, cell: Cell, macro: str) -> Markup:
        content = cell.content
        if isinstance(content, Property):
            content = content.accept(self)
        else:
            content = Markup(self.formatters.htmlifier.to_html(content))

        attributes = Markup(self.formatters.cellifier.to_cell(cell.content).html_attributes())
        return Markup(getattr(self.template, macro)(cell, content, attributes))

    def _render_group(self, element: Iterable[Any], macro: str) -> Markup:
        return Markup(getattr(self.template, macro)(element, self._render_children(element)))

    def visit_table(self, table: Table) -> Markup:
        return self._render_group(table, "table")

    def visit_table_header(self, header: TableHeader) -> Markup:
        return self._render_group(header, "thead")

    def visit_table_body(self, body: TableBody) -> Markup:
        return self._render_group(body, "tbody")

    def visit_table_footer(self, footer: TableFooter) -> Markup:
        return self._render_group(footer, "tfoot")

    def visit_row(self, row: Row) -> Markup:
        return self._render_group(row, "tr")

    def visit_header_cell(self, cell: HeaderCell) -> Markup:
        return self._render_cell(cell, "th")

    def visit_data_cell(self, cell: DataCell) -> Markup:
        return self._render_cell(cell, "td")

    def visit_footer_cell(self, cell: FooterCell) -> Markup:
        return self._render_cell(cell, "tf")

    def visit_label(self, label: Label) -> Markup:
        return Markup(self.template.label(label.content))

    def visit_member(self, member: Member) -> Markup:
        return Markup(self.template.member(member.content))

    def visit_value(self, value: Value) -> Markup:
        return Markup(self.template.value(value.content))


class TableRenderer:
    """Render results as HTML pivot tables or flat tables."""

    def __init__(
        self,
        environment: Environment | None = None,
        theme: str | None = None,
        formatters: Formatters | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.formatters = formatters or create_formatters(settings)
        self.environment = environment or create_environment(self.formatters)
        self.theme = theme or settings.html_theme

    def render(
        self,
        result: Result,
        output_type: OutputType | str = OutputType.AUTO,
        pivoted_dimensions: Sequence[str] = (VALUES_NODE,),
        superfluous_legends: Sequence[str] = (VALUES_NODE,),
        theme: str | None = None,
        subtotals: Sequence[str] = (),
    ) -> str:
        """Render a result as HTML.

        AUTO renders a pivot table and falls back to a flat table when the
        rows cannot be arranged in a tree.

        Args:
            result: Result to render
            output_type: AUTO, PIVOT_TABLE or TABLE
            pivoted_dimensions: Tree levels rendered as column headers
            superfluous_legends: Tree levels whose legend is left blank
            theme: Theme template overriding the renderer's default
            subtotals: Row dimensions that get subtotal rows

        Returns:
            HTML fragment containing one table
        """
        with selectively_wrapped():
            try:
                output_type = OutputType(output_type)
            except ValueError:
                raise UnsupportedData(
                    'Unsupported output type "{type}"', type=output_type
                ) from None

            if output_type is OutputType.TABLE:
                return self._render_table(result, theme=theme)
            if output_type is OutputType.PIVOT_TABLE:
                return self._render_pivot_table(
                    result, pivoted_dimensions, superfluous_legends, theme, subtotals
                )

            try:
                return self._render_pivot_table(
                    result, pivoted_dimensions, superfluous_legends, theme, subtotals
                )
            except (HierarchicalOrderingRequired, EmptyResult) as e:
                logger.info(
                    "Falling back to flat table",
                    extra={"reason": type(e).__name__},
                )
                return self._render_table(result, theme=theme)

    def render_pivot_table(
        self,
        result: Result,
        pivoted_dimensions: Sequence[str] = (VALUES_NODE,),
        superfluous_legends: Sequence[str] = (VALUES_NODE,),
        theme: str | None = None,
        subtotals: Sequence[str] = (),
    ) -> str:
        with selectively_wrapped():
            return self._render_pivot_table(
                result, pivoted_dimensions, superfluous_legends, theme, subtotals
            )

    def render_table(
        self,
        result: Result,
        dimensions: Sequence[str] | None = None,
        measures: Sequence[str] | None = None,
        theme: str | None = None,
    ) -> str:
        with selectively_wrapped():
            return self._render_table(result, dimensions, measures, theme)

    def _render_pivot_table(
        self,
        result: Result,
        pivoted_dimensions: Sequence[str],
        superfluous_legends: Sequence[str],
        theme: str | None,
        subtotals: Sequence[str] = (),
    ) -> str:
        tree = PivotTableAdapter.adapt(result.tree)
        table = transform_tree_to_table(
            tree,
            pivoted_nodes=pivoted_dimensions,
            superfluous_legends=superfluous_legends,
            subtotals=subtotals,
        )
        logger.debug(
            "Rendering pivot table",
            extra={"pivoted": list(pivoted_dimensions), "theme": theme or self.theme},
        )
        return self._render(table, theme)

    def _render_table(
        self,
        result: Result,
        dimensions: Sequence[str] | None = None,
        measures: Sequence[str] | None = None,
        theme: str | None = None,
    ) -> str:
        table = transform_result_set_to_table(TableAdapter(result, dimensions, measures))
        logger.debug(
            "Rendering flat table",
            extra={"rows": len(table.body), "theme": theme or self.theme},
        )
        return self._render(table, theme)

    def _render(self, table: Table, theme: str | None) -> str:
        visitor = HtmlRendererVisitor(self.environment, theme or self.theme, self.formatters)
        return str(table.accept(visitor))
