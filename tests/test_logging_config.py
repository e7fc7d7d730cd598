"""Tests for logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from analytics_frontend.core.logging_config import LOGGING_CONFIG, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger = logging.getLogger("analytics_frontend")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logging_writes_json_file(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"
    setup_logging(log_level="debug", log_dir=str(log_dir))

    get_logger("analytics_frontend.chart").debug("Chart created", extra={"datasets": 2})
    for handler in logging.getLogger("analytics_frontend").handlers:
        handler.flush()

    lines = (log_dir / "analytics_frontend.log").read_text().splitlines()
    record = json.loads(lines[-1])
    assert record["message"] == "Chart created"
    assert record["datasets"] == 2
    assert record["levelname"] == "DEBUG"


def test_setup_logging_levels(tmp_path: Path) -> None:
    setup_logging(json_output=True, log_level="warning", log_dir=str(tmp_path))

    logger = logging.getLogger("analytics_frontend")
    console = next(h for h in logger.handlers if not isinstance(h, logging.FileHandler))
    assert logger.level == logging.WARNING
    assert console.level == logging.WARNING
    assert console.formatter.__class__.__name__ == "JsonFormatter"


def test_setup_logging_leaves_default_config_untouched(tmp_path: Path) -> None:
    setup_logging(json_output=True, log_level="ERROR", log_dir=str(tmp_path))

    assert LOGGING_CONFIG["handlers"]["console"]["formatter"] == "console"
    assert LOGGING_CONFIG["handlers"]["json_file"]["filename"] == "logs/analytics_frontend.log"


def test_get_logger_returns_named_logger() -> None:
    assert get_logger("analytics_frontend.html").name == "analytics_frontend.html"
