"""Custom Pydantic validators for configuration.

This module provides validators for custom type conversions shared by the
settings model and the bootstrap helpers.
"""

from xray_lite.errors import BadConfigError


def validate_log_level(value: str) -> str:
    """Validate log level is one of the standard levels.

    Args:
        value: Log level string.

    Returns:
        Validated log level.

    Raises:
        ValueError: If log level is not valid.
    """
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if value.upper() not in valid_levels:
        raise ValueError(f"log_level must be one of {valid_levels}, got {value}")
    return value.upper()


def validate_log_format(value: str) -> str:
    """Validate log format is 'json' or 'console'.

    Args:
        value: Log format string.

    Returns:
        Validated log format.

    Raises:
        ValueError: If log format is not valid.
    """
    valid_formats = {"json", "console"}
    if value.lower() not in valid_formats:
        raise ValueError(f"log_format must be one of {valid_formats}, got {value}")
    return value.lower()


def validate_daemon_address(value: str) -> str:
    """Validate a ``host:port`` daemon address.

    Args:
        value: Daemon address.

    Returns:
        The address, stripped of surrounding whitespace.

    Raises:
        ValueError: If the address has no host or no valid port.
    """
    from xray_lite.client import parse_daemon_address  # noqa: PLC0415

    try:
        parse_daemon_address(value)
    except BadConfigError as e:
        raise ValueError(str(e)) from e
    return value.strip()
