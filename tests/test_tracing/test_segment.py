"""Tests for the subsegment record."""

import json
import re

from xray_lite.ids import SegmentId, TraceId
from xray_lite.segment import Subsegment

TRACE_ID = TraceId("1-5759e988-bd862e3fe1be46a994272793")
PARENT_ID = SegmentId("53995c3f42cd8ad8")


class TestLifecycle:
    """Test begin() and end()."""

    def test_begin_is_in_progress(self) -> None:
        """Test a new subsegment is in progress with no end time."""
        subsegment = Subsegment.begin(TRACE_ID, PARENT_ID, "S3")

        assert subsegment.in_progress is True
        assert subsegment.end_time is None
        assert subsegment.name == "S3"
        assert subsegment.trace_id == TRACE_ID
        assert subsegment.parent_id == PARENT_ID
        assert subsegment.start_time > 0

    def test_begin_generates_fresh_ids(self) -> None:
        """Test each subsegment gets its own 16-hex-digit id."""
        first = Subsegment.begin(TRACE_ID, None, "a")
        second = Subsegment.begin(TRACE_ID, None, "b")

        assert first.id != second.id
        assert re.fullmatch(r"[0-9a-f]{16}", str(first.id))

    def test_end_sets_end_time(self) -> None:
        """Test end() completes the subsegment."""
        subsegment = Subsegment.begin(TRACE_ID, PARENT_ID, "S3")

        subsegment.end()

        assert subsegment.in_progress is False
        assert subsegment.end_time is not None
        assert subsegment.end_time >= subsegment.start_time


class TestMerge:
    """Test set-if-absent decoration."""

    def test_set_aws_does_not_overwrite(self) -> None:
        """Test a second set_aws keeps the first operation and fills request_id."""
        subsegment = Subsegment.begin(TRACE_ID, None, "S3")

        subsegment.set_aws(operation="GetObject")
        subsegment.set_aws(operation="PutObject", request_id="abc")

        assert subsegment.aws is not None
        assert subsegment.aws.operation == "GetObject"
        assert subsegment.aws.request_id == "abc"

    def test_set_namespace_keeps_first(self) -> None:
        """Test the top-level namespace is only set once."""
        subsegment = Subsegment.begin(TRACE_ID, None, "S3")

        subsegment.set_namespace("aws")
        subsegment.set_namespace("remote")

        assert subsegment.namespace == "aws"

    def test_set_http_request_does_not_overwrite(self) -> None:
        """Test request fields are filled only when absent."""
        subsegment = Subsegment.begin(TRACE_ID, None, "remote")

        subsegment.set_http_request(method="GET")
        subsegment.set_http_request(method="POST", url="https://example.com/")

        assert subsegment.http is not None
        assert subsegment.http.request is not None
        assert subsegment.http.request.method == "GET"
        assert subsegment.http.request.url == "https://example.com/"

    def test_set_http_response_without_request(self) -> None:
        """Test a response status can be set before any request info."""
        subsegment = Subsegment.begin(TRACE_ID, None, "remote")

        subsegment.set_http_response(404)
        subsegment.set_http_response(200)

        assert subsegment.http is not None
        assert subsegment.http.request is None
        assert subsegment.http.response is not None
        assert subsegment.http.response.status == 404

    def test_set_http_response_none_is_noop(self) -> None:
        """Test a missing status does not allocate an http block."""
        subsegment = Subsegment.begin(TRACE_ID, None, "remote")

        subsegment.set_http_response(None)

        assert subsegment.http is None


class TestWireFormat:
    """Test the JSON document sent to the daemon."""

    def test_in_progress_document(self) -> None:
        """Test ids render as strings and absent fields are omitted."""
        subsegment = Subsegment.begin(TRACE_ID, PARENT_ID, "S3")

        document = json.loads(subsegment.to_json())

        assert document["id"] == str(subsegment.id)
        assert document["trace_id"] == "1-5759e988-bd862e3fe1be46a994272793"
        assert document["parent_id"] == "53995c3f42cd8ad8"
        assert document["name"] == "S3"
        assert document["type"] == "subsegment"
        assert document["in_progress"] is True
        assert "end_time" not in document
        assert "aws" not in document
        assert "http" not in document
        assert "namespace" not in document

    def test_completed_document(self) -> None:
        """Test a finished subsegment carries end_time and nested blocks."""
        subsegment = Subsegment.begin(TRACE_ID, None, "S3")
        subsegment.set_namespace("aws")
        subsegment.set_aws(operation="GetObject")
        subsegment.set_http_response(200)
        subsegment.end()

        document = json.loads(subsegment.to_json())

        assert document["in_progress"] is False
        assert document["end_time"] == subsegment.end_time
        assert "parent_id" not in document
        assert document["namespace"] == "aws"
        assert document["aws"] == {"operation": "GetObject"}
        assert document["http"] == {"response": {"status": 200}}

    def test_to_wire_matches_to_json(self) -> None:
        """Test the dict and JSON renderings agree."""
        subsegment = Subsegment.begin(TRACE_ID, PARENT_ID, "S3")

        assert json.loads(subsegment.to_json()) == subsegment.to_wire()
