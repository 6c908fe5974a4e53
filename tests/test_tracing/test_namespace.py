"""Tests for namespaces."""

from xray_lite.ids import TraceId
from xray_lite.namespace import AwsNamespace, CustomNamespace, RemoteNamespace
from xray_lite.segment import Subsegment


def _subsegment() -> Subsegment:
    return Subsegment.begin(TraceId("1-5759e988-bd862e3fe1be46a994272793"), None, "test")


class TestAwsNamespace:
    """Test the AWS service namespace."""

    def test_name_is_service(self) -> None:
        """Test the prefix is ignored."""
        namespace = AwsNamespace("S3", "GetObject")

        assert namespace.name("") == "S3"
        assert namespace.name("prefix") == "S3"

    def test_update_sets_operation(self) -> None:
        subsegment = _subsegment()

        AwsNamespace("S3", "GetObject").update_subsegment(subsegment)

        assert subsegment.namespace == "aws"
        assert subsegment.aws is not None
        assert subsegment.aws.operation == "GetObject"
        assert subsegment.aws.request_id is None
        assert subsegment.http is None

    def test_update_sets_request_id(self) -> None:
        subsegment = _subsegment()

        AwsNamespace("S3", "GetObject").request_id("12345").update_subsegment(subsegment)

        assert subsegment.aws is not None
        assert subsegment.aws.request_id == "12345"

    def test_update_sets_response_status(self) -> None:
        subsegment = _subsegment()

        AwsNamespace("S3", "GetObject").response_status(200).update_subsegment(subsegment)

        assert subsegment.http is not None
        assert subsegment.http.response is not None
        assert subsegment.http.response.status == 200

    def test_request_id_added_on_second_pass(self) -> None:
        """Test post-hoc request id is merged without clobbering first-pass fields."""
        subsegment = _subsegment()
        namespace = AwsNamespace("S3", "GetObject")

        namespace.update_subsegment(subsegment)
        namespace.request_id("abc")
        namespace.update_subsegment(subsegment)

        assert subsegment.namespace == "aws"
        assert subsegment.aws is not None
        assert subsegment.aws.operation == "GetObject"
        assert subsegment.aws.request_id == "abc"

    def test_does_not_override_other_namespace(self) -> None:
        """Test decorating a remote subsegment keeps its namespace."""
        subsegment = _subsegment()

        RemoteNamespace("example", "GET", "https://example.com/").update_subsegment(subsegment)
        AwsNamespace("S3", "GetObject").update_subsegment(subsegment)

        assert subsegment.namespace == "remote"
        assert subsegment.aws is not None


class TestRemoteNamespace:
    """Test the remote service namespace."""

    def test_name_is_name(self) -> None:
        namespace = RemoteNamespace("codemonger.io", "GET", "https://codemonger.io/")

        assert namespace.name("") == "codemonger.io"
        assert namespace.name("prefix") == "codemonger.io"

    def test_update_sets_request(self) -> None:
        subsegment = _subsegment()

        RemoteNamespace("codemonger.io", "GET", "https://codemonger.io/").update_subsegment(
            subsegment
        )

        assert subsegment.namespace == "remote"
        assert subsegment.http is not None
        assert subsegment.http.request is not None
        assert subsegment.http.request.method == "GET"
        assert subsegment.http.request.url == "https://codemonger.io/"
        assert subsegment.http.response is None

    def test_update_sets_response_status(self) -> None:
        subsegment = _subsegment()
        namespace = RemoteNamespace("codemonger.io", "GET", "https://codemonger.io/")

        namespace.update_subsegment(subsegment)
        namespace.response_status(503)
        namespace.update_subsegment(subsegment)

        assert subsegment.http is not None
        assert subsegment.http.request is not None
        assert subsegment.http.request.method == "GET"
        assert subsegment.http.response is not None
        assert subsegment.http.response.status == 503


class TestCustomNamespace:
    """Test the custom namespace."""

    def test_name_is_prefixed(self) -> None:
        namespace = CustomNamespace("TestSubsegment")

        assert namespace.name("") == "TestSubsegment"
        assert namespace.name("prefix") == "prefixTestSubsegment"

    def test_update_does_nothing(self) -> None:
        subsegment = _subsegment()
        before = subsegment.model_copy(deep=True)

        CustomNamespace("TestSubsegment").update_subsegment(subsegment)

        assert subsegment == before
