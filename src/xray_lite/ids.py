"""Identifiers and timestamps carried by trace headers and segments.

A TraceId or SegmentId is either a rendered token (as read from a header or
freshly generated) or the unset marker. Both are immutable.
"""

import os
import secrets
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class TraceId:
    """Identifier of an end-to-end trace.

    Attributes:
        value: Rendered token, or None for the unset marker.
    """

    value: str | None = None

    @classmethod
    def new(cls) -> "TraceId":
        """Generate a trace id in X-Ray format.

        Returns:
            TraceId of the form ``1-<8 hex epoch seconds>-<24 hex random>``.
        """
        return cls(f"1-{int(time.time()):08x}-{os.urandom(12).hex()}")

    @classmethod
    def unset(cls) -> "TraceId":
        """Return the unset marker."""
        return cls(None)

    @property
    def is_set(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        return self.value or ""


@dataclass(frozen=True)
class SegmentId:
    """Identifier of a single segment or subsegment.

    Attributes:
        value: Rendered token, or None for the unset marker.
    """

    value: str | None = None

    @classmethod
    def new(cls) -> "SegmentId":
        """Generate a segment id (16 lowercase hex characters)."""
        return cls(secrets.token_hex(8))

    @classmethod
    def unset(cls) -> "SegmentId":
        """Return the unset marker."""
        return cls(None)

    @property
    def is_set(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        return self.value or ""


class Seconds(float):
    """Seconds since the Unix epoch, with sub-second precision."""

    @classmethod
    def now(cls) -> "Seconds":
        return cls(time.time())
