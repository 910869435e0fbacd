"""Structured logging for the Trash Odyssey engine.

Engine modules log through structlog with key-value context: the combat
processor logs each resolved round at debug and each start, end, revive
and level-up at info; the registries log rejected data records at
warning. Output is a colored console stream while developing and JSON
lines when ``json_logs`` is set.

Example:
    >>> from trash_odyssey.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Combat started", enemy_id="slime_mold", is_boss=False)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from trash_odyssey.core.config import Settings


APP_NAME = "trash_odyssey"
STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the application name."""
    event_dict["app"] = APP_NAME
    return event_dict


def _level_number(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def _build_processors(json_format: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        json_format: Render JSON lines instead of console output.
        log_file: Also append standard library records to this file.
    """
    threshold = _level_number(level)

    structlog.configure(
        processors=_build_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format=STDLIB_FORMAT, level=threshold, stream=sys.stdout, force=True)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(threshold)
        file_handler.setFormatter(logging.Formatter(STDLIB_FORMAT))
        logging.getLogger().addHandler(file_handler)


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from application settings.

    Debug mode always logs at DEBUG, whatever ``log_level`` says.
    """
    if settings is None:
        from trash_odyssey.core.config import get_settings

        settings = get_settings()
    level = "DEBUG" if settings.debug else settings.log_level
    configure_logging(level=level, json_format=settings.json_logs)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context included in every later entry until cleared.

    Example:
        >>> bind_context(session_id="abc123", location="backyard")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context, e.g. when an Act-2 session ends."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind context for the duration of a block, restoring the previous values.

    Example:
        >>> with log_context(enemy_id="rat_king"):
        ...     logger.info("Boss phase changed")
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


__all__ = [
    "add_app_context",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
