"""Structured logging infrastructure for gitexec.

Provides structured logging using structlog with gitexec-specific context
such as the invocation id and component name. Output goes through the
standard library root logger, rendered either for the console or as JSON.

Example usage:
    from gitexec.core.logging import get_logger, configure_logging, with_context

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("executor")

    # Log with auto-context
    logger.info("git.starting", subcommand="fetch")

    # Use an invocation context for automatic correlation
    ctx = InvocationContext(subcommand="clone")
    with with_context(ctx):
        logger.info("git.completed")  # Automatically includes invocation_id
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Sensitive field patterns that should never be logged
SENSITIVE_PATTERNS = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "test_username",
})

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


@dataclass(frozen=True)
class InvocationContext:
    """Immutable context for correlating log entries of one git invocation.

    Attributes:
        invocation_id: Unique id of the invocation (UUID).
        subcommand: The git subcommand being run (first argument), if known.
        cwd: Working directory of the invocation, if known.
    """

    invocation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    subcommand: str | None = None
    cwd: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging (excludes None values)."""
        result: dict[str, Any] = {"invocation_id": self.invocation_id}
        if self.subcommand is not None:
            result["subcommand"] = self.subcommand
        if self.cwd is not None:
            result["cwd"] = self.cwd
        return result


# ContextVar keeps concurrent invocations isolated from each other
_current_context: ContextVar[InvocationContext | None] = ContextVar(
    "gitexec_context", default=None
)


def get_current_context() -> InvocationContext | None:
    """Get the current InvocationContext if set."""
    return _current_context.get()


@contextmanager
def with_context(ctx: InvocationContext) -> Iterator[InvocationContext]:
    """Set the InvocationContext for the duration of a block.

    All log calls within the block include the context fields when the
    context processor is active.

    Args:
        ctx: The InvocationContext to use for the block.

    Yields:
        The InvocationContext that was set.
    """
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def _sanitize_value(key: str, value: Any) -> Any:
    """Return "[REDACTED]" for values stored under sensitive keys."""
    key_lower = key.lower()
    for pattern in SENSITIVE_PATTERNS:
        if pattern in key_lower:
            return "[REDACTED]"
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that sanitizes sensitive fields.

    Nested dicts (such as an environment overlay) are sanitized one level
    deep, so ``env={"TEST_PASSWORD": ...}`` never reaches a log sink.
    """
    sanitized: EventDict = {}
    for key, value in event_dict.items():
        if isinstance(value, dict):
            sanitized[key] = {
                k: _sanitize_value(k, v) for k, v in value.items()
            }
        else:
            sanitized[key] = _sanitize_value(key, value)
    return sanitized


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds an ISO8601 UTC timestamp."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def _add_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds InvocationContext fields to log entries.

    Explicitly bound fields take precedence over context fields.
    """
    ctx = get_current_context()
    if ctx is not None:
        for key, value in ctx.to_dict().items():
            if key not in event_dict:
                event_dict[key] = value
    return event_dict


class GitexecLogger:
    """gitexec-specific logger wrapper around structlog.

    The logger is bound to a component name and can have additional context
    bound for a specific scope.

    Note: the underlying structlog logger is fetched lazily on every call so
    that loggers created at import time respect configuration applied later
    via configure_logging().
    """

    def __init__(self, component: str, **initial_context: Any) -> None:
        self._component = component
        self._context: dict[str, Any] = {"component": component, **initial_context}

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        logger: structlog.stdlib.BoundLogger = structlog.get_logger().bind(**self._context)
        return logger

    def bind(self, **context: Any) -> GitexecLogger:
        """Create a new logger with additional bound context."""
        new_logger = GitexecLogger.__new__(GitexecLogger)
        new_logger._component = self._component
        new_logger._context = {**self._context, **context}
        return new_logger

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._get_logger().error(event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log an exception with traceback; call from an exception handler."""
        self._get_logger().exception(event, **kw)


def _get_processors(
    format: LogFormat,  # noqa: A002
    include_timestamps: bool,
    include_context: bool,
) -> list[Processor]:
    """Build the structlog processor chain for the given output format."""
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
    ]

    if include_context:
        processors.append(_add_context)

    if include_timestamps:
        processors.append(_add_timestamp)

    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ])

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    return processors


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "console",  # noqa: A002
    include_timestamps: bool = True,
    include_context: bool = True,
) -> None:
    """Configure gitexec structured logging.

    Call once at application startup. Console output goes to stderr, JSON
    output to stdout.

    Args:
        level: Minimum log level to capture.
        format: "console" for human-readable output, "json" for structured.
        include_timestamps: Whether to include ISO8601 timestamps.
        include_context: Whether to include InvocationContext fields.

    Raises:
        ValueError: If the format is not recognised.
    """
    if format not in ("json", "console"):
        raise ValueError(f"Unknown log format: {format!r}")

    log_level = getattr(logging, level)

    stream = sys.stdout if format == "json" else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # cache_logger_on_first_use=False so module-level loggers pick up late config
    structlog.configure(
        processors=_get_processors(format, include_timestamps, include_context),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> GitexecLogger:
    """Get a gitexec logger for a component (e.g. "executor", "cli")."""
    return GitexecLogger(component, **initial_context)


__all__ = [
    "GitexecLogger",
    "InvocationContext",
    "SENSITIVE_PATTERNS",
    "configure_logging",
    "get_current_context",
    "get_logger",
    "with_context",
]
