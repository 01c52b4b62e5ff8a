"""Logging setup for filekit.

All modules log through structlog. ``configure_logging`` installs the
processor chain once per process; until it is called structlog's defaults
apply, which is what the test-suite relies on.

Usage:
    from filekit.utils.log import configure_logging, log_at

    configure_logging()
    log_at(logger, "warning", "search.miss", filename="pg_dump")

Environment:
    FILEKIT_DEBUG: Set to '1', 'true', 'yes' (case-insensitive) to enable
                   debug output.
    FILEKIT_LOG_LEVEL: Minimum level (debug, info, warning, error, critical).
    FILEKIT_LOG_JSON: Emit JSON lines instead of console-formatted output.
"""

import logging
import sys
from typing import Any

import structlog

from filekit.core.settings import FileKitSettings, load_settings

__all__ = ["LEVELS", "configure_logging", "log_at"]

LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def configure_logging(
    level: str | None = None,
    *,
    json: bool | None = None,
    settings: FileKitSettings | None = None,
) -> None:
    """Configure structlog for console or JSON output on stderr.

    Args:
        level: Override for the minimum level; defaults to the settings
        json: Override for JSON rendering; defaults to the settings
        settings: Settings to use instead of reading the environment
    """
    settings = settings or load_settings()
    level_name = (level or settings.effective_level).lower()
    if level_name not in LEVELS:
        raise ValueError(f"Unknown log level: {level_name}")

    use_json = settings.log_json if json is None else json
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LEVELS[level_name]),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def log_at(logger: Any, level: str, event: str, **kw: Any) -> None:
    """Emit ``event`` at a level chosen by the caller.

    Args:
        logger: structlog logger (bound or proxy)
        level: One of the LEVELS names
        event: Event name
        **kw: Key/value context for the event
    """
    level_name = level.lower()
    if level_name not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    getattr(logger, level_name)(event, **kw)
