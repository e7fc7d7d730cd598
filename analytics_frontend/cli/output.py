"""Console output helpers shared by the CLI commands.

Console output is the user-facing channel; structured logging (``logger``)
is for troubleshooting. Commands report outcomes here and log details there.
"""

from __future__ import annotations

from enum import Enum

import typer


class OutputColor(str, Enum):
    """Valid color options for plain text output."""

    WHITE = "WHITE"
    CYAN = "CYAN"
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"
    MAGENTA = "MAGENTA"
    BLUE = "BLUE"


def _emit(symbol: str, message: str, prefix: bool, color: str, err: bool = False) -> None:
    typer.secho(f"{symbol} {message}" if prefix else message, fg=color, err=err)


def success(message: str, *, prefix: bool = True) -> None:
    """Green message with a checkmark, e.g. ``✅ Chart written to chart.json``."""
    _emit("✅", message, prefix, typer.colors.GREEN)


def error(message: str, *, prefix: bool = True, err: bool = True) -> None:
    """Red message with a cross, written to stderr unless ``err`` is False."""
    _emit("❌", message, prefix, typer.colors.RED, err=err)


def info(message: str, *, prefix: bool = True) -> None:
    _emit("ℹ️ ", message, prefix, typer.colors.CYAN)


def warning(message: str, *, prefix: bool = True) -> None:
    _emit("⚠️ ", message, prefix, typer.colors.YELLOW)


def plain(message: str, *, color: OutputColor | None = None) -> None:
    """Display a message without prefix, optionally colored.

    Example:
        plain("  rows: 12", color=OutputColor.WHITE)
    """
    if color:
        typer.secho(message, fg=getattr(typer.colors, color.value))
    else:
        typer.echo(message)


def data(message: str, *, prefix: bool = True) -> None:
    """Cyan message with a chart symbol, used to announce produced artifacts."""
    _emit("📊", message, prefix, typer.colors.CYAN)
