"""Structured logging for the xray_lite package using structlog.

Loggers returned by get_logger() wrap stdlib loggers under the ``xray_lite``
namespace with a private processor chain, so importing the package never
touches the global structlog configuration. Records end up as ordinary
stdlib log records carrying the event fields as extras; the host
application's handlers decide where they go.

configure_logging() is an explicit opt-in that attaches a stderr handler to
the package logger with:
- JSON output (the default, suited to Lambda log capture)
- Pretty-printed console output for local debugging
- UTC timestamps
- Component tracking
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

PACKAGE_LOGGER = "xray_lite"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def _get_log_level() -> str:
    """Get log level from configuration.

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Bootstrap from environment to avoid circular imports during startup.
    from xray_lite.config.bootstrap import get_bootstrap_log_level  # noqa: PLC0415

    return get_bootstrap_log_level()


def _get_log_format() -> str:
    """Get log format (json or console) from configuration."""
    from xray_lite.config.bootstrap import get_bootstrap_log_format  # noqa: PLC0415

    return get_bootstrap_log_format()


def _add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add UTC timestamp to log event.

    Args:
        logger: The logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with timestamp added.
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_component(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name to log event from the logger name.

    Runs after structlog's add_logger_name processor, so the dotted logger
    name (e.g. "xray_lite.session") is already in the event dict.
    """
    logger_name = event_dict.get("logger", "")
    event_dict["component"] = logger_name.split(".")[-1] if logger_name else "unknown"
    return event_dict


_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.render_to_log_kwargs,
]


def _configure_stream_handler(log_format: str) -> logging.StreamHandler[Any]:
    """Configure the stderr handler.

    Args:
        log_format: "json" for one JSON object per line, "console" for
            pretty-printed output.

    Returns:
        Configured StreamHandler.
    """
    handler = logging.StreamHandler(sys.stderr)

    if log_format == "console":
        renderer: Any = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.ExtraAdder(),
                _add_timestamp,  # type: ignore[list-item]
                _add_component,
            ],
        )
    )

    return handler


def configure_logging() -> None:
    """Send xray_lite logs to stderr.

    Only the package logger is configured: it gets its own handler, level
    and ``propagate=False``. Neither the root logger nor the global
    structlog configuration of the host application is changed. Calling it
    again replaces the handler.
    """
    log_level = _get_log_level()
    log_format = _get_log_format()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, log_level, logging.WARNING))
    package_logger.handlers.clear()
    package_logger.addHandler(_configure_stream_handler(log_format))
    package_logger.propagate = False


def get_logger(name: str) -> Any:  # Returns structlog.stdlib.BoundLogger
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        structlog logger bound to the stdlib logger of that name.

    Example:
        >>> from xray_lite.telemetry import get_logger
        >>> log = get_logger(__name__)
        >>> log.debug("subsegment_entered", subsegment="S3", segment_id="53995c3f42cd8ad8")
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
