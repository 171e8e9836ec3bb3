"""
structlog setup for steam-outline.

Every command prints its result as JSON on stdout, so log events
always go to stderr: rendered as JSON lines when LOG_FORMAT=json,
as key=value console lines otherwise.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

from steam_outline.config import LoggingConfig, get_settings


def _renderer(config: LoggingConfig) -> "Processor":
    if config.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging() -> None:
    """
    Route structlog and stdlib logging to stderr.

    Called once by the CLI before dispatching a command. The level
    applies to both, so LOG_LEVEL=DEBUG also shows httpx requests.
    """
    config = get_settings().logging

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if config.include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))
    processors.append(_renderer(config))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, config.level),
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Logger for a module, with context bound to every event.

    The logger resolves its configuration on first use, so module-level
    loggers created at import time still honour setup_logging().

    Example:
        >>> logger = get_logger(__name__, component="fetcher")
        >>> logger.info("Fetching catalog", username="rabscuttle")
    """
    return structlog.get_logger(name, **initial_context)
