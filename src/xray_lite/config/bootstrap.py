"""Bootstrap configuration helpers (pre-settings).

These helpers exist for "chicken-and-egg" situations where we need a small amount
of configuration before the full Pydantic settings can be loaded: the logger
is configured on first use, which can happen while settings are still being
imported.

Constraints:
- Keep this module dependency-light (no telemetry imports) to avoid circular imports.
- Prefer validating values using existing config validators.
"""

from __future__ import annotations

import os

LOG_LEVEL_ENV = "XRAY_LOG_LEVEL"
LOG_FORMAT_ENV = "XRAY_LOG_FORMAT"


def get_bootstrap_log_level(default: str = "WARNING") -> str:
    """Get logging level from environment without importing settings.

    Args:
        default: Default log level if not set or invalid.

    Returns:
        Uppercased, validated log level string.
    """
    from xray_lite.config.validators import validate_log_level  # noqa: PLC0415

    value = os.getenv(LOG_LEVEL_ENV, default)
    try:
        return validate_log_level(value)
    except ValueError:
        return validate_log_level(default)


def get_bootstrap_log_format(default: str = "json") -> str:
    """Get log format from environment without importing settings.

    Args:
        default: Default log format if not set or invalid.

    Returns:
        Lowercased, validated log format string.
    """
    from xray_lite.config.validators import validate_log_format  # noqa: PLC0415

    value = os.getenv(LOG_FORMAT_ENV, default)
    try:
        return validate_log_format(value)
    except ValueError:
        return validate_log_format(default)
