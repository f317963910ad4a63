"""structlog setup shared by the server and the CLI."""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from .config import LoggingConfig


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Route structlog events through a level filter to stdout."""

    config = config or LoggingConfig()
    level = logging.getLevelName(config.level)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer: Any
    if config.json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


__all__ = ["configure_logging", "get_logger"]
