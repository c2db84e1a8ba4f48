"""Structured logging configuration using structlog.

Provides correlation IDs for tracing a tiling build across the solver and
the BFS expander, and configurable output formats (JSON for machine
consumption, colored console for dev).
"""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.types import Processor

from hypertile.config import settings

# Context variables for correlation IDs
_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)
_triple: ContextVar[str | None] = ContextVar("triple", default=None)
_bfs_level: ContextVar[int | None] = ContextVar("bfs_level", default=None)


def set_correlation_context(
    run_id: str | None = None,
    triple: str | None = None,
    bfs_level: int | None = None,
) -> None:
    """Set correlation IDs for the current context.

    Args:
        run_id: Unique identifier for the tiling build
        triple: The (p,q,r) triple being built, e.g. "2,3,7"
        bfs_level: Current BFS expansion level
    """
    if run_id is not None:
        _run_id.set(run_id)
    if triple is not None:
        _triple.set(triple)
    if bfs_level is not None:
        _bfs_level.set(bfs_level)


def clear_correlation_context() -> None:
    """Clear all correlation context variables."""
    _run_id.set(None)
    _triple.set(None)
    _bfs_level.set(None)


@contextmanager
def correlation_scope() -> Iterator[None]:
    """Restore the correlation IDs present on entry when the block exits."""
    variables = (_run_id, _triple, _bfs_level)
    tokens = [var.set(var.get()) for var in variables]
    try:
        yield
    finally:
        for var, token in zip(variables, tokens, strict=True):
            var.reset(token)


def _add_correlation_ids(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to add correlation IDs to log events."""
    _ = logger, method_name  # Required by structlog processor signature
    run_id = _run_id.get()
    triple = _triple.get()
    bfs_level = _bfs_level.get()

    if run_id is not None:
        event_dict["run_id"] = run_id
    if triple is not None:
        event_dict["triple"] = triple
    if bfs_level is not None:
        event_dict["bfs_level"] = bfs_level

    return event_dict


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure structlog with the specified settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.LOG_LEVEL.
        log_format: Output format ("console" or "json").
                    Defaults to settings.LOG_FORMAT.
    """
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_correlation_ids,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def configure_library_defaults() -> None:
    """Route kernel logs through stdlib logging until an application configures.

    Without this, structlog's default print logger writes every debug event
    to stdout. Routed through stdlib, events obey the host's logging levels
    (WARNING and above on the last-resort handler when nothing is set up).
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _add_correlation_ids,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_library_defaults()
