"""structlog setup shared by the CLI and the API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

    from tubepilot.core.models.config import LogConfig


def configure_logging(config: LogConfig) -> None:
    """Configure structlog level filtering and rendering.

    Args:
        config: Logging configuration; ``structured`` selects JSON output
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if config.structured:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(config.level)),
        cache_logger_on_first_use=False,
    )
