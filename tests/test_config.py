"""Tests for settings loaded from the environment and .env files."""

from __future__ import annotations

from pathlib import Path

import pytest

from analytics_frontend.core.config import DEFAULT_THEME, Settings, get_settings

AF_KEYS = [
    "AF_LOCALE",
    "AF_HTML_THEME",
    "AF_CHART_DPI",
    "AF_AREA_TRANSPARENCY",
    "AF_AREA_BORDER_WIDTH",
    "AF_LABEL_FONT_SIZE",
    "AF_LABEL_FONT_WEIGHT",
    "AF_THOUSANDS_SEPARATOR",
    "AF_DECIMAL_SEPARATOR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in AF_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = get_settings()
    assert settings == Settings()
    assert settings.html_theme == DEFAULT_THEME
    assert settings.locale == "en"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AF_LOCALE", "id")
    monkeypatch.setenv("AF_CHART_DPI", "150")
    monkeypatch.setenv("AF_THOUSANDS_SEPARATOR", " ")

    settings = get_settings()

    assert settings.locale == "id"
    assert settings.chart_dpi == 150
    assert settings.thousands_separator == " "


def test_env_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "# chart styling\n"
        "AF_AREA_TRANSPARENCY='80'\n"
        'AF_HTML_THEME="bootstrap_5_renderer.html.j2"\n'
        "not a setting\n"
        "AF_DECIMAL_SEPARATOR=,\n"
    )

    settings = get_settings()

    assert settings.area_transparency == "80"
    assert settings.html_theme == "bootstrap_5_renderer.html.j2"
    assert settings.decimal_separator == ","


def test_process_environment_wins_over_env_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    (tmp_path / ".env").write_text("AF_LOCALE=fr\n")
    monkeypatch.setenv("AF_LOCALE", "de")

    assert get_settings().locale == "de"


def test_invalid_integer_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AF_LABEL_FONT_SIZE", "large")
    assert get_settings().label_font_size == Settings().label_font_size
