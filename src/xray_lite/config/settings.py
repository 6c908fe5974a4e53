"""X-Ray client settings.

This module provides the XRaySettings class and the settings singleton.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from xray_lite.config.env_loader import load_env_files
from xray_lite.config.validators import (
    validate_daemon_address,
    validate_log_format,
    validate_log_level,
)
from xray_lite.telemetry.events import SETTINGS_LOAD_FAILED, SETTINGS_LOADED
from xray_lite.telemetry.logger import get_logger

log = get_logger(__name__)


class XRaySettings(BaseSettings):
    """Unified X-Ray client configuration.

    Reads the variables the Lambda runtime sets for X-Ray, plus the client's
    own ``XRAY_`` variables. Values are validated by Pydantic.
    """

    model_config = SettingsConfigDict(
        # .env files are loaded manually via env_loader to honor priority order
        env_prefix="XRAY_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Daemon
    daemon_address: str = Field(
        default="127.0.0.1:2000",
        alias="AWS_XRAY_DAEMON_ADDRESS",
        description="X-Ray daemon address (host:port)",
    )

    # Trace context
    trace_header: str | None = Field(
        default=None,
        alias="_X_AMZN_TRACE_ID",
        description="Trace header of the current invocation",
    )
    name_prefix: str = Field(
        default="",
        alias="XRAY_NAME_PREFIX",
        description="Prefix prepended to custom subsegment names",
    )

    # Telemetry
    log_level: str = Field(
        default="WARNING",
        alias="XRAY_LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="json", alias="XRAY_LOG_FORMAT", description="Log format (json or console)"
    )

    @field_validator("daemon_address")
    @classmethod
    def validate_daemon_address(cls, v: str) -> str:
        """Validate daemon address."""
        return validate_daemon_address(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        return validate_log_level(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        return validate_log_format(v)


_settings: XRaySettings | None = None


def load_settings() -> XRaySettings:
    """Load and validate the X-Ray client settings.

    This function:
    1. Loads .env files in priority order (via env_loader)
    2. Creates XRaySettings instance (reads from environment variables)
    3. Validates all values using Pydantic

    Returns:
        Validated XRaySettings instance.

    Raises:
        ValidationError: If configuration validation fails.
    """
    load_env_files()

    try:
        config = XRaySettings()
    except Exception as e:
        log.error(SETTINGS_LOAD_FAILED, error=str(e), error_type=type(e).__name__)
        raise

    log.debug(
        SETTINGS_LOADED,
        daemon_address=config.daemon_address,
        has_trace_header=config.trace_header is not None,
        log_level=config.log_level,
    )
    return config


def get_settings() -> XRaySettings:
    """Get the settings singleton.

    Returns:
        XRaySettings instance (singleton pattern).
    """
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
