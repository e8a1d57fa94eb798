"""
Centralized logging configuration for the SignTools engine.

This module provides standardized logging configuration using structlog
for all components. Marker transitions and alert decisions go through the
helpers below so the audit trail has a consistent shape.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_lifecycle_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for marker lifecycle events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying the marker_lifecycle subsystem tag
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="marker_lifecycle",
        audit_trail=True
    )


def get_alert_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for alert decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying the alerts subsystem tag
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="alerts",
        audit_trail=True
    )


def log_marker_transition(
    logger: FilteringBoundLogger,
    bar_index: int,
    marker_id: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a marker lifecycle transition with standardized format.

    Args:
        logger: Structlog logger instance
        bar_index: Index of the bar the marker is attached to
        marker_id: Chart object id of the marker
        from_state: Previous marker state ("none", "provisional", ...)
        to_state: New marker state
        trigger: What triggered the transition (tick, bar_open, backfill)
        context: Additional context data
    """
    bound_logger = logger.bind(
        bar_index=bar_index,
        marker_id=marker_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Marker transition")


def log_alert_decision(
    logger: FilteringBoundLogger,
    event: str,
    fired: bool,
    policy: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an alert policy decision.

    Args:
        logger: Structlog logger instance
        event: Lifecycle event that was offered to the dispatcher
        fired: Whether the alert fired
        policy: Configured alert policy name
        reason: Why the alert fired or was suppressed
        context: Additional context data
    """
    bound_logger = logger.bind(
        alert_event=event,
        alert_result="FIRED" if fired else "SUPPRESSED",
        policy=policy,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if fired:
        bound_logger.info("Alert fired")
    else:
        bound_logger.debug("Alert suppressed")
