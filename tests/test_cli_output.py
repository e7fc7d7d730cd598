"""Tests for CLI console output helpers."""

from __future__ import annotations

import pytest

from analytics_frontend.cli import output
from analytics_frontend.cli.output import OutputColor


@pytest.mark.parametrize(
    "emit, symbol",
    [
        (output.success, "✅"),
        (output.info, "ℹ️"),
        (output.warning, "⚠️"),
        (output.data, "📊"),
    ],
)
def test_prefixed_messages_go_to_stdout(capsys: pytest.CaptureFixture[str], emit, symbol: str) -> None:
    """Each helper prefixes its symbol unless told otherwise."""
    emit("chart.json written")
    captured = capsys.readouterr()
    assert symbol in captured.out
    assert "chart.json written" in captured.out
    assert captured.err == ""

    emit("chart.json written", prefix=False)
    captured = capsys.readouterr()
    assert symbol not in captured.out
    assert captured.out.strip() == "chart.json written"


def test_error_writes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    output.error("Result file not found")
    captured = capsys.readouterr()
    assert "❌ Result file not found" in captured.err
    assert captured.out == ""


def test_error_to_stdout_without_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    output.error("Result file not found", prefix=False, err=False)
    captured = capsys.readouterr()
    assert "❌" not in captured.out
    assert "Result file not found" in captured.out


def test_success_symbol_is_separated_by_a_space(capsys: pytest.CaptureFixture[str]) -> None:
    output.success("Workbook saved")
    assert "✅ Workbook saved" in capsys.readouterr().out


def test_plain(capsys: pytest.CaptureFixture[str]) -> None:
    output.plain("  rows: 3")
    output.plain("  columns: 2", color=OutputColor.WHITE)
    captured = capsys.readouterr()
    assert captured.out == "  rows: 3\n  columns: 2\n"


def test_output_colors_map_to_typer_colors() -> None:
    import typer

    for color in OutputColor:
        assert getattr(typer.colors, color.value)
