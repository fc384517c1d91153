"""structlog configuration for continhas.

Modules log with ``structlog.get_logger()`` and event-style names. The CLI
calls ``configure_logging`` once at startup; until then structlog's defaults
apply.
"""

import logging
import sys

import structlog

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(name: str | None) -> int:
    """Map a config level name to a logging level (WARNING when unknown)."""
    if name is None:
        return logging.WARNING
    return LEVELS.get(name.strip().lower(), logging.WARNING)


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    # Looked up per call so a replaced sys.stderr is honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure structlog to render to stderr, filtering below ``level``.

    Args:
        level: Minimum stdlib logging level to emit.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
