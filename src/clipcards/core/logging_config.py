"""Structured logging for clipcards using structlog.

Console output for local runs, context binding and stage timing. Every
module gets its logger through ``get_logger(__name__)`` and logs snake_case
event names with key/value context.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Any

import structlog

_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "colored",
    log_timestamps: bool = True,
) -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        log_format: "colored" for terminals, "plain" for redirection, "json" for
            log shippers
        log_timestamps: Whether to include ISO timestamps
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso" if log_timestamps else None),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    elif log_format == "colored":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, typically named after the calling module."""
    return structlog.get_logger(name)


class Timer:
    """Context manager that logs start, completion and failure of a stage.

    Example:
        with Timer(logger, "chunking", segments=len(segments)) as timer:
            chunks = chunk_transcript(segments, duration)
            timer.complete(chunks=len(chunks))

    Calling ``complete`` logs the completion event with extra context; the
    exit handler then stays quiet on success. Failures are always logged on
    exit and the exception propagates.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        operation: str,
        **context: Any,
    ) -> None:
        self.logger = logger.bind(operation=operation, **context)
        self.operation = operation
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self._completed = False

    def __enter__(self) -> Timer:
        self.start_time = time.monotonic()
        self.logger.info(f"{self.operation}_started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.end_time = time.monotonic()
        duration_ms = (self.end_time - self.start_time) * 1000

        if exc_type is not None:
            self.logger.error(
                f"{self.operation}_failed",
                duration_ms=round(duration_ms, 2),
                error_type=exc_type.__name__,
                error=str(exc_val) if exc_val else None,
            )
        elif not self._completed:
            self.logger.info(
                f"{self.operation}_completed",
                duration_ms=round(duration_ms, 2),
            )

    def complete(self, **extra_context: Any) -> None:
        """Log completion with additional context."""
        self.end_time = time.monotonic()
        duration_ms = (self.end_time - self.start_time) * 1000
        self._completed = True

        self.logger.info(
            f"{self.operation}_completed",
            duration_ms=round(duration_ms, 2),
            **extra_context,
        )
