"""Structured logging for the summary engine.

Usage:
    from dataskim.core.logging import get_logger, configure_logging

    # Configure at startup
    configure_logging(log_level="INFO", log_format="console")

    # Get logger in any module
    logger = get_logger(__name__)

    # Log with structured context
    logger.info("skim_started", data="orders", columns=12)

    # Use context managers for automatic context propagation
    with log_context(data="orders", group=("EU",)):
        logger.info("column_skimmed", variable="amount")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, cast

import structlog
from structlog.typing import FilteringBoundLogger

# Context variables for correlation
_run_context: ContextVar[dict[str, Any] | None] = ContextVar("run_context", default=None)


@dataclass
class SkimMetrics:
    """Counters collected during one summarization call."""

    data_name: str
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    end_time: datetime | None = None

    groups_processed: int = 0
    columns_processed: int = 0
    statistics_computed: int = 0
    statistics_failed: int = 0

    # Sub-operation timings (seconds), keyed by column type
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def duration_seconds(self) -> float:
        """Get duration in seconds."""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return (datetime.now(UTC) - self.start_time).total_seconds()

    def record_timing(self, operation: str, seconds: float) -> None:
        """Record timing for a sub-operation."""
        self.timings[operation] = self.timings.get(operation, 0.0) + seconds

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "data_name": self.data_name,
            "duration_seconds": self.duration_seconds,
            "groups_processed": self.groups_processed,
            "columns_processed": self.columns_processed,
            "statistics_computed": self.statistics_computed,
            "statistics_failed": self.statistics_failed,
            "timings": self.timings,
        }


_current_metrics: ContextVar[SkimMetrics | None] = ContextVar("current_metrics", default=None)


def start_skim_metrics(data_name: str) -> SkimMetrics:
    """Start collecting metrics for a summarization call."""
    metrics = SkimMetrics(data_name=data_name)
    _current_metrics.set(metrics)
    return metrics


def get_skim_metrics() -> SkimMetrics | None:
    """Get current summarization metrics."""
    return _current_metrics.get()


def end_skim_metrics() -> SkimMetrics | None:
    """End metrics collection for the current call."""
    metrics = _current_metrics.get()
    if metrics:
        metrics.end_time = datetime.now(UTC)
        _current_metrics.set(None)
    return metrics


def _add_run_context(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Processor to add run context to log events."""
    context = _run_context.get()
    if context:
        event_dict.update(context)
    return event_dict


def configure_logging(
    log_level: str = "WARNING",
    log_format: str = "console",
    show_timestamps: bool = True,
    color: bool = True,
    configure_stdlib: bool = False,
) -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Output format ("console" for development, "json" for production)
        show_timestamps: Whether to show timestamps in console mode
        color: Whether to use colors in console mode
        configure_stdlib: Also route stdlib logging to stderr at the same level
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_run_context,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if show_timestamps:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=color,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    if configure_stdlib:
        logging.basicConfig(
            format="%(message)s",
            level=getattr(logging, log_level.upper()),
            handlers=[logging.StreamHandler(sys.stderr)],
            force=True,
        )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Bound structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))


class LogContext:
    """Context manager for adding context to logs within a scope."""

    def __init__(self, **context: Any):
        self.context = context
        self.token: Any = None

    def __enter__(self) -> LogContext:
        current = _run_context.get() or {}
        new_context = {**current, **self.context}
        self.token = _run_context.set(new_context)
        return self

    def __exit__(self, *args: Any) -> None:
        if self.token:
            _run_context.reset(self.token)


def log_context(**context: Any) -> LogContext:
    """Create a context manager for scoped logging context.

    Usage:
        with log_context(data="orders", group=("EU",)):
            logger.info("processing")  # Will include data and group
    """
    return LogContext(**context)


def increment_statistics(computed: int = 0, failed: int = 0) -> None:
    """Increment statistic counters in the current metrics."""
    metrics = _current_metrics.get()
    if metrics:
        metrics.statistics_computed += computed
        metrics.statistics_failed += failed


def record_columns_processed(count: int) -> None:
    """Record columns processed in the current metrics."""
    metrics = _current_metrics.get()
    if metrics:
        metrics.columns_processed += count


def record_groups_processed(count: int) -> None:
    """Record groups processed in the current metrics."""
    metrics = _current_metrics.get()
    if metrics:
        metrics.groups_processed += count


def record_operation_timing(operation: str, seconds: float) -> None:
    """Record timing for a sub-operation in the current metrics."""
    metrics = _current_metrics.get()
    if metrics:
        metrics.record_timing(operation, seconds)


def _configure_from_settings() -> None:
    from dataskim.core.config import get_settings

    settings = get_settings()
    configure_logging(log_level=settings.log_level, log_format=settings.log_format)


# Initialize with configuration from the environment
_configure_from_settings()
