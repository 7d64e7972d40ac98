"""Structured logging for tunas.

Levels and formats come from Settings (LOG_LEVEL, LOG_FORMAT, ENVIRONMENT).
Log lines always go to stderr; the CLI prints its tables on stdout and only
lets warnings through unless run with --verbose.

Usage:
    from tunas import configure_logging, get_logger

    configure_logging()
    logger = get_logger(__name__)
    logger.info("club_swimmers_loaded", club_code="SCSC", swimmers=112)
"""

import logging
import sys
from typing import Any

import structlog

from tunas.config import LogFormat, Settings, get_settings

# Request-per-line loggers that drown out our own events at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _level_number(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _environment_adder(environment: str) -> structlog.typing.Processor:
    def add_environment(
        logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["environment"] = environment
        return event_dict

    return add_environment


def _renderers(log_format: LogFormat) -> list[structlog.typing.Processor]:
    if log_format == LogFormat.JSON:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(settings: Settings | None = None, level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Source of level, format and environment (default: get_settings())
        level: Overrides settings.log_level, e.g. "WARNING" for a quiet CLI
    """
    settings = settings or get_settings()
    log_level = _level_number(level or settings.log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            _environment_adder(settings.environment.value),
            *_renderers(settings.resolved_log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)
    # basicConfig does nothing once handlers exist (uvicorn, pytest)
    logging.getLogger().setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key-value pairs to every following log line in this context.

    Example:
        bind_context(swimmer_id="1234567890ABCD")
        logger.info("history_built")  # includes swimmer_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
