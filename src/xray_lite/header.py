"""X-Ray tracing header codec.

The ``X-Amzn-Trace-Id`` header carries the trace id, the parent segment id
and the sampling decision across service boundaries:

    Root=1-5759e988-bd862e3fe1be46a994272793;Parent=53995c3f42cd8ad8;Sampled=1

Unrecognized ``key=value`` fragments are preserved so that headers from
newer producers survive a round trip through this client.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from xray_lite.errors import HeaderParseError
from xray_lite.ids import SegmentId, TraceId

_ROOT_PREFIX = "Root="
_PARENT_PREFIX = "Parent="
_SAMPLED_PREFIX = "Sampled="
_SELF_PREFIX = "Self="


class SamplingDecision(str, Enum):
    """Sampling decision propagated in the header.

    Values are the header fragments they are rendered as; UNKNOWN renders
    as nothing.
    """

    SAMPLED = "Sampled=1"
    NOT_SAMPLED = "Sampled=0"
    # Decision deferred to the downstream service.
    REQUESTED = "Sampled=?"
    UNKNOWN = ""

    @classmethod
    def from_fragment(cls, fragment: str) -> "SamplingDecision":
        """Map a ``Sampled=`` fragment to a decision.

        Args:
            fragment: Header fragment such as ``Sampled=1``.

        Returns:
            Matching decision, or UNKNOWN for anything unrecognized.
        """
        for decision in (cls.SAMPLED, cls.NOT_SAMPLED, cls.REQUESTED):
            if fragment == decision.value:
                return decision
        return cls.UNKNOWN


@dataclass(frozen=True)
class Header:
    """Parsed representation of the ``X-Amzn-Trace-Id`` header.

    Headers are never modified in place; use with_parent_id(),
    with_sampling_decision() or insert_data() to derive a new one. The
    additional data is copied into a read-only mapping, so headers are
    hashable and equal headers hash equally.

    Attributes:
        trace_id: Trace this header belongs to.
        parent_id: Segment the next segment should be nested under.
        sampling_decision: Sampling decision made upstream.
        additional_data: Unrecognized fragments, kept verbatim.
    """

    NAME = "X-Amzn-Trace-Id"

    trace_id: TraceId = field(default_factory=TraceId.unset)
    parent_id: SegmentId | None = None
    sampling_decision: SamplingDecision = SamplingDecision.UNKNOWN
    additional_data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "additional_data", MappingProxyType(dict(self.additional_data)))

    def __hash__(self) -> int:
        return hash(
            (
                self.trace_id,
                self.parent_id,
                self.sampling_decision,
                tuple(self.additional_data.items()),
            )
        )

    def with_parent_id(self, parent_id: SegmentId) -> "Header":
        """Return a copy with the parent id replaced."""
        return Header(
            trace_id=self.trace_id,
            parent_id=parent_id,
            sampling_decision=self.sampling_decision,
            additional_data=dict(self.additional_data),
        )

    def with_sampling_decision(self, decision: SamplingDecision) -> "Header":
        """Return a copy with the sampling decision replaced."""
        return Header(
            trace_id=self.trace_id,
            parent_id=self.parent_id,
            sampling_decision=decision,
            additional_data=dict(self.additional_data),
        )

    def insert_data(self, key: str, value: str) -> "Header":
        """Return a copy with one more additional ``key=value`` pair."""
        additional_data = dict(self.additional_data)
        additional_data[key] = value
        return Header(
            trace_id=self.trace_id,
            parent_id=self.parent_id,
            sampling_decision=self.sampling_decision,
            additional_data=additional_data,
        )

    def __str__(self) -> str:
        return format_header(self)


def parse(text: str) -> Header:
    """Parse header text into a Header.

    Args:
        text: Header value, e.g. ``Root=...;Parent=...;Sampled=1``.

    Returns:
        Parsed Header. If no ``Root=`` fragment is present the trace id is
        the unset marker.

    Raises:
        HeaderParseError: If a fragment other than Root, Parent, Sampled or
            Self has no ``=``.
    """
    trace_id = TraceId.unset()
    parent_id: SegmentId | None = None
    sampling_decision = SamplingDecision.UNKNOWN
    additional_data: dict[str, str] = {}

    for fragment in text.split(";"):
        if fragment.startswith(_ROOT_PREFIX):
            trace_id = TraceId(fragment[len(_ROOT_PREFIX) :])
        elif fragment.startswith(_PARENT_PREFIX):
            parent_id = SegmentId(fragment[len(_PARENT_PREFIX) :])
        elif fragment.startswith(_SAMPLED_PREFIX):
            sampling_decision = SamplingDecision.from_fragment(fragment)
        elif fragment.startswith(_SELF_PREFIX):
            continue
        else:
            key, sep, value = fragment.partition("=")
            if not sep:
                raise HeaderParseError(
                    f"invalid key=value: no `=` found in `{fragment}` (header: `{text}`)"
                )
            additional_data[key] = value

    return Header(
        trace_id=trace_id,
        parent_id=parent_id,
        sampling_decision=sampling_decision,
        additional_data=additional_data,
    )


def format_header(header: Header) -> str:
    """Render a Header as header text.

    Root comes first, then Parent (if any), then the sampling decision (if
    known), then additional data in mapping order.
    """
    parts = [f"{_ROOT_PREFIX}{header.trace_id}"]
    if header.parent_id is not None:
        parts.append(f"{_PARENT_PREFIX}{header.parent_id}")
    if header.sampling_decision is not SamplingDecision.UNKNOWN:
        parts.append(header.sampling_decision.value)
    parts.extend(f"{key}={value}" for key, value in header.additional_data.items())
    return ";".join(parts)
