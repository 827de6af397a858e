"""Configuration defaults and logging setup."""

import logging
import os
import sys

import structlog

# Environment variable overrides; CLI options take precedence
DEFAULT_OUTPUT_FORMAT = os.environ.get("RESTDOC_OUTPUT_FORMAT", "markdown")
DEFAULT_TITLE = os.environ.get("RESTDOC_TITLE", "REST Endpoint Descriptions")
DEFAULT_API_VERSION = os.environ.get("RESTDOC_API_VERSION", "1.0")
DEFAULT_BASE_PATH = os.environ.get("RESTDOC_BASE_PATH", "/")
DEFAULT_LOG_LEVEL = os.environ.get("RESTDOC_LOG_LEVEL", "WARNING")


def get_logger(name: str):
    """A structlog logger backed by the stdlib logger of the same name.

    Nothing is printed until the host application (or configure_logging)
    sets up stdlib logging; warnings and errors still reach stderr through
    logging's last-resort handler.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(level: str | int = DEFAULT_LOG_LEVEL) -> None:
    """Send log output to stderr, dropping events below level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(message)s",
        force=True,
    )
