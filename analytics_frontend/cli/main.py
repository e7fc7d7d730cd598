from __future__ import annotations

import json
from pathlib import Path

import typer
import yaml

from .. import __version__
from ..chart.generator import ChartGenerator
from ..chart.image import ChartImageRenderer
from ..core.config import get_settings
from ..core.enums import ChartType, OutputType
from ..core.exceptions import AnalyticsFrontendError
from ..core.logging_config import get_logger, setup_logging
from ..html.renderer import TableRenderer
from ..result.loader import load_result
from ..result.model import VALUES_NODE, Result
from . import output as cli_output

app = typer.Typer(help="analytics-frontend CLI: charts, HTML tables and spreadsheets from query results")

logger = get_logger(__name__)


@app.callback()
def callback(
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Configure global CLI options."""
    setup_logging(json_output=json_logs, log_level=log_level)
    logger.debug("CLI initialized", extra={"json_logs": json_logs, "log_level": log_level})


def _load(path: Path) -> Result:
    try:
        return load_result(path)
    except FileNotFoundError:
        cli_output.error(f"Result file not found: {path}")
        raise typer.Exit(code=1) from None
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        cli_output.error(f"Invalid result document: {e}")
        raise typer.Exit(code=1) from None
    except (AnalyticsFrontendError, KeyError, TypeError, ValueError) as e:
        logger.exception("Failed to load result", extra={"path": str(path)})
        cli_output.error(f"Invalid result document: {e}")
        raise typer.Exit(code=1) from None


@app.command()
def version() -> None:
    """Print version."""
    typer.echo(__version__)


@app.command()
def chart(
    result_path: Path = typer.Argument(..., help="Result document (.json, .yaml)"),  # noqa: B008
    chart_type: ChartType = typer.Option(  # noqa: B008
        ChartType.AUTO, "--type", case_sensitive=False, help="Chart type"
    ),
    output: str | None = typer.Option(
        None, help="Write the Chart.js configuration to this JSON file instead of stdout"
    ),
    image: str | None = typer.Option(None, help="Also render the chart to this PNG file"),
) -> None:
    """Build a Chart.js configuration for a result and optionally render it to PNG."""
    settings = get_settings()
    result = _load(result_path)

    try:
        chart_config = ChartGenerator(settings=settings).create_chart(result, chart_type)
    except AnalyticsFrontendError as e:
        logger.info("Chart not supported", extra={"path": str(result_path), "error": str(e)})
        cli_output.error(f"Cannot create chart: {e}")
        raise typer.Exit(code=1) from None

    if output:
        p = Path(output)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(chart_config.to_json(indent=2), encoding="utf-8")
        cli_output.success(f"Chart configuration written to {output}")
    else:
        typer.echo(chart_config.to_json(indent=2))

    if image:
        image_path = Path(image)
        renderer = ChartImageRenderer(output_dir=image_path.parent, dpi=settings.chart_dpi)
        try:
            rendered = renderer.render(chart_config, image_path.stem)
        except AnalyticsFrontendError as e:
            cli_output.error(f"Cannot render chart image: {e}")
            raise typer.Exit(code=1) from None
        if "path" not in rendered:
            cli_output.error(f"Failed to write chart image: {image}")
            raise typer.Exit(code=1)
        cli_output.success(f"Chart image written to {rendered['path']}")


@app.command()
def table(
    result_path: Path = typer.Argument(..., help="Result document (.json, .yaml)"),  # noqa: B008
    output_type: OutputType = typer.Option(  # noqa: B008
        OutputType.AUTO, case_sensitive=False, help="auto, pivot_table or table"
    ),
    pivot: list[str] | None = typer.Option(  # noqa: B008
        None, help="Dimension rendered as column headers (repeatable; default: @values)"
    ),
    theme: str | None = typer.Option(
        None, help="Theme template, e.g. bootstrap_5_renderer.html.j2"
    ),
    output: str | None = typer.Option(None, help="Write HTML to this file instead of stdout"),
) -> None:
    """Render a result as an HTML pivot table or flat table."""
    settings = get_settings()
    result = _load(result_path)

    try:
        html = TableRenderer(theme=theme, settings=settings).render(
            result,
            output_type=output_type,
            pivoted_dimensions=pivot or [VALUES_NODE],
        )
    except AnalyticsFrontendError as e:
        cli_output.error(f"Cannot render table: {e}")
        raise typer.Exit(code=1) from None
    except RuntimeError as e:
        cli_output.error(str(e))
        raise typer.Exit(code=1) from None
    except Exception:
        logger.exception("Unexpected error while rendering table", extra={"path": str(result_path)})
        cli_output.error("Unexpected error while rendering table; see logs for details")
        raise typer.Exit(code=1) from None

    if output:
        p = Path(output)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(html, encoding="utf-8")
        cli_output.success(f"HTML table written to {output}")
    else:
        typer.echo(html)


@app.command()
def spreadsheet(
    result_path: Path = typer.Argument(..., help="Result document (.json, .yaml)"),  # noqa: B008
    dimension: list[str] | None = typer.Option(  # noqa: B008
        None, help="Dimension to include or lay out as rows (repeatable; default: all)"
    ),
    measure: list[str] | None = typer.Option(  # noqa: B008
        None, help="Measure to include (repeatable; default: all)"
    ),
    column: list[str] | None = typer.Option(  # noqa: B008
        None,
        help="Dimension pivoted into columns (repeatable). Any --column renders a pivot table; "
        "use '@values' to spread measures over columns",
    ),
    output: str | None = typer.Option(None, help="Output .xlsx path (default: <result>.xlsx)"),
    google_sheets: bool = typer.Option(
        False, "--google-sheets", help="Also export to a new Google Sheet"
    ),
    credentials: str | None = typer.Option(
        None, help="Service account JSON (default: GOOGLE_APPLICATION_CREDENTIALS)"
    ),
    title: str | None = typer.Option(None, help="Google Sheet title (default: result file name)"),
) -> None:
    """Export a result as a spreadsheet (flat table, or pivot table with --column)."""
    from ..spreadsheet.renderer import SpreadsheetRenderer

    result = _load(result_path)
    renderer = SpreadsheetRenderer()

    try:
        if column:
            grid = renderer.pivot_table_grid(
                result, measures=measure, rows=dimension or (), columns=column
            )
        else:
            grid = renderer.table_grid(result, dimensions=dimension, measures=measure)
    except AnalyticsFrontendError as e:
        cli_output.error(f"Cannot render spreadsheet: {e}")
        raise typer.Exit(code=1) from None

    out_path = Path(output) if output else result_path.with_suffix(".xlsx")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    renderer.to_workbook(grid).save(out_path)
    cli_output.success(f"Spreadsheet written to {out_path}")

    if google_sheets:
        from ..spreadsheet.google import GoogleSheetsExporter

        try:
            exporter = GoogleSheetsExporter(credentials_path=credentials)
            url = exporter.export_grid(grid, title or result_path.stem)
        except ValueError as e:
            cli_output.error(f"Google Sheets credentials error: {e}")
            raise typer.Exit(code=1) from None
        except RuntimeError as e:
            cli_output.error(str(e))
            raise typer.Exit(code=1) from None

        typer.echo("")  # Blank line
        cli_output.data("Google Sheets:")
        cli_output.plain(f"  {url}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
