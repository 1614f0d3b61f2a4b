"""Structured JSON logging configuration.

Configures Python stdlib logging to emit one JSON object per record on
stdout, with a ``severity`` field mapped from ``levelname``. The library
itself only creates module loggers; applications opt in by calling
``configure_logging()``.

Usage:
    from slack_markdown_blocks.logging_config import configure_logging
    configure_logging()
"""

import copy
import logging
import logging.config

from slack_markdown_blocks.config import get_settings

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "slack-markdown-blocks",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str | None = None) -> None:
    """Apply structured JSON logging configuration.

    Args:
        level: Root log level. Defaults to ``Settings.log_level``.
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    config["root"]["level"] = (level or get_settings().log_level).upper()
    logging.config.dictConfig(config)
