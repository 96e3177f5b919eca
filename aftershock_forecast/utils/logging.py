"""Logging configuration for the aftershock forecaster."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from aftershock_forecast.config import LOG_LEVEL, LOG_FORMAT


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Log records go to stderr so tables and CSV written to stdout stay clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for log messages
    """
    level = level or LOG_LEVEL
    format_string = format_string or LOG_FORMAT

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        handlers=[
            RichHandler(console=Console(stderr=True), show_path=False),
        ],
        force=True,
    )
