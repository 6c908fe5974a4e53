"""Subsegment record and its JSON wire representation.

Subsegments are sent to the daemon twice: once when they begin (with
``in_progress`` set) and once when they end (with ``end_time`` set). The
nested ``aws`` and ``http`` blocks are populated with set-if-absent merges,
so decorating the same record more than once never overwrites a value
written earlier.
"""

from typing import Any

from pydantic import BaseModel, Field, InstanceOf, field_serializer

from xray_lite.ids import SegmentId, Seconds, TraceId


class AwsOperation(BaseModel):
    """AWS service operation details (``aws`` block)."""

    operation: str | None = Field(None, description="Operation name, e.g. GetObject")
    request_id: str | None = Field(None, description="Request id returned by the service")


class Request(BaseModel):
    """Outbound HTTP request details (``http.request`` block)."""

    method: str | None = None
    url: str | None = None


class Response(BaseModel):
    """HTTP response details (``http.response`` block)."""

    status: int | None = None


class Http(BaseModel):
    """HTTP call details (``http`` block)."""

    request: Request | None = None
    response: Response | None = None


class Subsegment(BaseModel):
    """A subsegment of a trace, as reported to the X-Ray daemon.

    Exactly one of ``end_time`` / ``in_progress`` is meaningful at a time:
    a fresh subsegment is in progress with no end time; once end() is
    called it carries an end time and is no longer in progress.
    """

    id: InstanceOf[SegmentId] = Field(default_factory=SegmentId.new)
    name: str = ""
    start_time: float = Field(default_factory=Seconds.now)
    end_time: float | None = None
    in_progress: bool = True
    trace_id: InstanceOf[TraceId] = Field(default_factory=TraceId.unset)
    parent_id: InstanceOf[SegmentId] | None = None
    type: str = "subsegment"
    namespace: str | None = None
    aws: AwsOperation | None = None
    http: Http | None = None

    @field_serializer("id", "trace_id", "parent_id")
    def _render_id(self, value: SegmentId | TraceId | None) -> str | None:
        return None if value is None else str(value)

    @classmethod
    def begin(cls, trace_id: TraceId, parent_id: SegmentId | None, name: str) -> "Subsegment":
        """Start a new subsegment.

        Args:
            trace_id: Trace the subsegment belongs to.
            parent_id: Segment to nest under, if any.
            name: Display name.

        Returns:
            In-progress subsegment with a fresh id and the current start time.
        """
        return cls(
            id=SegmentId.new(),
            name=name,
            start_time=Seconds.now(),
            trace_id=trace_id,
            parent_id=parent_id,
        )

    def end(self) -> None:
        """Mark the subsegment as finished at the current time."""
        self.end_time = Seconds.now()
        self.in_progress = False

    def set_aws(self, operation: str | None = None, request_id: str | None = None) -> None:
        """Fill in the ``aws`` block without overwriting existing values."""
        if self.aws is None:
            self.aws = AwsOperation()
        if self.aws.operation is None:
            self.aws.operation = operation
        if self.aws.request_id is None:
            self.aws.request_id = request_id

    def set_http_request(self, method: str | None = None, url: str | None = None) -> None:
        """Fill in ``http.request`` without overwriting existing values."""
        if self.http is None:
            self.http = Http()
        if self.http.request is None:
            self.http.request = Request()
        if self.http.request.method is None:
            self.http.request.method = method
        if self.http.request.url is None:
            self.http.request.url = url

    def set_http_response(self, status: int | None) -> None:
        """Fill in ``http.response.status`` without overwriting it.

        The ``http`` block is created when missing; a request block is not
        required.
        """
        if status is None:
            return
        if self.http is None:
            self.http = Http()
        if self.http.response is None:
            self.http.response = Response()
        if self.http.response.status is None:
            self.http.response.status = status

    def set_namespace(self, namespace: str) -> None:
        """Set the top-level namespace unless one is already set."""
        if self.namespace is None:
            self.namespace = namespace

    def to_wire(self) -> dict[str, Any]:
        """Return the record as a JSON-ready dict with absent fields omitted."""
        return self.model_dump(exclude_none=True)

    def to_json(self) -> str:
        """Return the compact JSON document sent to the daemon."""
        return self.model_dump_json(exclude_none=True)
