"""
Centralized logging configuration for the projection engine.

All components log through structlog loggers obtained from this module.
Loggers handed out here stay lazy: they resolve structlog's configuration
when they first emit, so a host application may call configure_logging()
after importing the engine.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

CALCULATIONS_SUBSYSTEM = "calculations"


def _shared_processors(include_timestamp: bool) -> list:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    return processors


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
) -> None:
    """
    Route engine logs through the standard library at the given level.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_json: Render JSON lines instead of console key=value output
        include_timestamp: Add an ISO timestamp to each record
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(stream=sys.stdout, format="%(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(log_level)

    renderer = (structlog.processors.JSONRenderer() if format_json
                else structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=[*_shared_processors(include_timestamp), renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers must pick up a reconfiguration
        cache_logger_on_first_use=False,
    )


def get_logger(name: str, **initial_values: Any) -> FilteringBoundLogger:
    """
    Get a lazy structlog logger.

    Args:
        name: Logger name (typically __name__)
        **initial_values: Context bound to every record
    """
    return structlog.get_logger(name, **initial_values)


def get_calculation_logger(name: str) -> FilteringBoundLogger:
    """Lazy logger tagged with the calculations subsystem."""
    return get_logger(name, subsystem=CALCULATIONS_SUBSYSTEM)


def log_sentinel_outcome(
    logger: FilteringBoundLogger,
    operation: str,
    sentinel: float,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Record that a calculation resolved to a sentinel value.

    Args:
        logger: Structlog logger instance
        operation: Calculation that produced the sentinel (irr, payback_period, ...)
        sentinel: The value returned to the caller
        reason: Why no regular answer exists
        context: Additional context data
    """
    bound_logger = logger.bind(
        operation=operation,
        sentinel=sentinel,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.warning("Calculation resolved to sentinel")
