from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_THEME = "renderer.html.j2"


@dataclass(frozen=True)
class Settings:
    locale: str = "en"
    html_theme: str = DEFAULT_THEME
    chart_dpi: int = 100
    area_transparency: str = "60"
    area_border_width: int = 1
    label_font_size: int = 14
    label_font_weight: str = "bold"
    thousands_separator: str = ","
    decimal_separator: str = "."


def _read_env_file() -> dict[str, str]:
    """Load minimal .env to support AF_* keys if not in the environment.

    We intentionally do not overwrite existing os.environ values.
    """
    env_path = Path.cwd() / ".env"
    env: dict[str, str] = {}
    if not env_path.exists():
        return env
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            env[k] = v
    except OSError as e:
        logger.warning("Ignoring unreadable .env file", extra={"error": str(e)})
        return {}
    return env


def _get_env(name: str, env_file: dict[str, str] | None = None) -> str | None:
    # Priority: process env -> .env
    val = os.getenv(name)
    if val:
        return val
    if env_file and name in env_file:
        return env_file[name]
    return None


def _get_int(name: str, default: int, env_file: dict[str, str]) -> int:
    raw = _get_env(name, env_file)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            f"Invalid integer for {name}, using default",
            extra={"value": raw, "default": default},
        )
        return default


def get_settings() -> Settings:
    env_file = _read_env_file()
    defaults = Settings()
    return Settings(
        locale=_get_env("AF_LOCALE", env_file) or defaults.locale,
        html_theme=_get_env("AF_HTML_THEME", env_file) or defaults.html_theme,
        chart_dpi=_get_int("AF_CHART_DPI", defaults.chart_dpi, env_file),
        area_transparency=_get_env("AF_AREA_TRANSPARENCY", env_file)
        or defaults.area_transparency,
        area_border_width=_get_int(
            "AF_AREA_BORDER_WIDTH", defaults.area_border_width, env_file
        ),
        label_font_size=_get_int(
            "AF_LABEL_FONT_SIZE", defaults.label_font_size, env_file
        ),
        label_font_weight=_get_env("AF_LABEL_FONT_WEIGHT", env_file)
        or defaults.label_font_weight,
        # Separators may legitimately be a single space
        thousands_separator=os.getenv(
            "AF_THOUSANDS_SEPARATOR",
            env_file.get("AF_THOUSANDS_SEPARATOR", defaults.thousands_separator),
        ),
        decimal_separator=os.getenv(
            "AF_DECIMAL_SEPARATOR",
            env_file.get("AF_DECIMAL_SEPARATOR", defaults.decimal_separator),
        ),
    )
