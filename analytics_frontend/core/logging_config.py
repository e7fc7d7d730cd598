"""Logging setup for analytics-frontend.

The package logger writes human-readable lines to stderr and structured
JSON records to a rotating file. ``--json-logs`` switches the console to
JSON as well.
"""

import copy
import logging
import logging.config
from pathlib import Path
from typing import Any

PACKAGE_LOGGER = "analytics_frontend"
LOG_FILE_NAME = "analytics_frontend.log"

LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
        "console": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
        "json_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "json",
            "filename": f"logs/{LOG_FILE_NAME}",
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "encoding": "utf-8",
        },
    },
    "loggers": {
        PACKAGE_LOGGER: {
            "level": "DEBUG",
            "handlers": ["console", "json_file"],
            "propagate": False,
        },
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
}


def setup_logging(
    json_output: bool = False, log_level: str = "INFO", log_dir: str = "logs"
) -> None:
    """Apply ``LOGGING_CONFIG`` with the CLI overrides.

    Args:
        json_output: Format console records as JSON too
        log_level: Level for the package logger and the console handler
        log_dir: Directory that receives the rotating JSON log file
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    # LOGGING_CONFIG stays the pristine default
    config = copy.deepcopy(LOGGING_CONFIG)
    config["handlers"]["json_file"]["filename"] = str(directory / LOG_FILE_NAME)

    if json_output:
        config["handlers"]["console"]["formatter"] = "json"

    if log_level:
        level = log_level.upper()
        config["handlers"]["console"]["level"] = level
        config["loggers"][PACKAGE_LOGGER]["level"] = level

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module.

    Example:
        logger = get_logger(__name__)
        logger.info("Chart created", extra={"chart_type": "bar", "datasets": 2})
    """
    return logging.getLogger(name)
