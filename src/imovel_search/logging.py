"""Structured logging configuration."""

import logging
import sys

import structlog

_LEVEL_NAMES: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(name: str) -> int:
    """Map a level name from settings to a stdlib logging level (INFO if unknown)."""
    return _LEVEL_NAMES.get(name.strip().lower(), logging.INFO)


def configure_logging(*, json_output: bool = False, level: int = logging.INFO) -> None:
    """Configure structlog for the search service.

    Args:
        json_output: Emit JSON lines (deployments) instead of the coloured console renderer.
        level: Minimum level to emit (default: INFO).
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
