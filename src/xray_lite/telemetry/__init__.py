"""Telemetry for the X-Ray client itself.

This module provides:
- Structured logging via structlog
- Semantic event constants
"""

from xray_lite.telemetry.events import (
    CLIENT_UNAVAILABLE,
    CONTEXT_UNAVAILABLE,
    ENV_FILES_LOADED,
    INTERCEPTOR_HOOK_FAILED,
    SEGMENT_SEND_FAILED,
    SEGMENT_SENT,
    SETTINGS_LOAD_FAILED,
    SETTINGS_LOADED,
    SUBSEGMENT_CLOSE_FAILED,
    SUBSEGMENT_CLOSED,
    SUBSEGMENT_ENTER_FAILED,
    SUBSEGMENT_ENTERED,
)
from xray_lite.telemetry.logger import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    # Event constants
    "SUBSEGMENT_ENTERED",
    "SUBSEGMENT_ENTER_FAILED",
    "SUBSEGMENT_CLOSED",
    "SUBSEGMENT_CLOSE_FAILED",
    "SEGMENT_SENT",
    "SEGMENT_SEND_FAILED",
    "CLIENT_UNAVAILABLE",
    "CONTEXT_UNAVAILABLE",
    "INTERCEPTOR_HOOK_FAILED",
    "SETTINGS_LOADED",
    "SETTINGS_LOAD_FAILED",
    "ENV_FILES_LOADED",
]
