"""Tests for the request interceptor hooks."""

from typing import Any

from xray_lite.context import SubsegmentContext
from xray_lite.header import Header, parse
from xray_lite.interceptor import StaticClassifier, TraceInterceptor
from xray_lite.namespace import AwsNamespace


class TableClassifier:
    """Classifies requests by looking up their target in a table."""

    def __init__(self, table: dict[str, tuple[str, str]]) -> None:
        self.table = table

    def classify_request(self, request: Any) -> AwsNamespace | None:
        entry = self.table.get(request["target"])
        return AwsNamespace(*entry) if entry is not None else None


class ExplodingClassifier:
    def classify_request(self, request: Any) -> AwsNamespace | None:
        raise KeyError("target")


class TestTraceInterceptor:
    """Test the before/after hook sequence."""

    def test_full_attempt(self, recording_client, trace_header: Header) -> None:
        """Test a traced attempt injects the header and records the response."""
        interceptor = TraceInterceptor(
            SubsegmentContext(recording_client, trace_header),
            StaticClassifier("DynamoDB", "GetItem"),
        )
        headers: dict[str, str] = {}

        interceptor.before_attempt({"target": "DynamoDB_20120810.GetItem"})
        interceptor.before_transmit(headers)
        interceptor.after_attempt(status=200, request_id="REQ123")

        first, final = recording_client.sent
        assert parse(headers["X-Amzn-Trace-Id"]).parent_id == first.id
        assert final.name == "DynamoDB"
        assert final.aws is not None
        assert final.aws.operation == "GetItem"
        assert final.aws.request_id == "REQ123"
        assert final.http is not None
        assert final.http.response is not None
        assert final.http.response.status == 200
        assert interceptor.session is None

    def test_unclassified_request_is_not_traced(self, recording_client, trace_header: Header) -> None:
        interceptor = TraceInterceptor(
            SubsegmentContext(recording_client, trace_header),
            TableClassifier({"s3": ("S3", "GetObject")}),
        )
        headers: dict[str, str] = {}

        interceptor.before_attempt({"target": "unknown"})
        interceptor.before_transmit(headers)
        interceptor.after_attempt(status=200)

        assert headers == {}
        assert recording_client.sent == []

    def test_failed_session_injects_nothing(self, failing_client, trace_header: Header) -> None:
        interceptor = TraceInterceptor(
            SubsegmentContext(failing_client, trace_header),
            StaticClassifier("S3", "GetObject"),
        )
        headers: dict[str, str] = {}

        interceptor.before_attempt({})
        interceptor.before_transmit(headers)
        interceptor.after_attempt(status=500)

        assert headers == {}
        assert failing_client.attempts == 1

    def test_classifier_errors_are_contained(self, recording_client, trace_header: Header) -> None:
        """Test a broken classifier never raises out of a hook."""
        interceptor = TraceInterceptor(
            SubsegmentContext(recording_client, trace_header), ExplodingClassifier()
        )

        interceptor.before_attempt({})
        interceptor.before_transmit({})
        interceptor.after_attempt()

        assert recording_client.sent == []

    def test_retry_closes_previous_attempt(self, recording_client, trace_header: Header) -> None:
        """Test a new attempt reports the subsegment left open by the previous one."""
        interceptor = TraceInterceptor(
            SubsegmentContext(recording_client, trace_header),
            StaticClassifier("S3", "GetObject"),
        )

        interceptor.before_attempt({})
        interceptor.before_attempt({})
        interceptor.after_attempt(status=200)

        assert len(recording_client.sent) == 4
        assert recording_client.sent[0].id == recording_client.sent[1].id
        assert recording_client.sent[1].in_progress is False
