"""Logging setup.

Modules log through logging.getLogger(__name__); this module decides
where those records go.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LOG_TIMESTAMP_FORMAT, LogLevel


def configure_logging(level: int = LogLevel.INFO, console: Console | None = None) -> None:
    """Route log records to stderr through Rich.

    Args:
        level: Root log level
        console: Console to write to (default: a stderr console)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        log_time_format=LOG_TIMESTAMP_FORMAT,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, LogLevel.WARNING))
