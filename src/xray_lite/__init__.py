"""Lightweight, best-effort client for AWS X-Ray.

Records subsegments of the current Lambda invocation and reports them to the
X-Ray daemon over UDP. Reporting failures never affect the traced code.

Example:
    >>> from xray_lite import AwsNamespace, DaemonClient, SubsegmentContext
    >>> client = DaemonClient.from_lambda_env()  # reads AWS_XRAY_DAEMON_ADDRESS
    >>> context = SubsegmentContext.from_lambda_env(client)  # reads _X_AMZN_TRACE_ID
    >>> with context.enter_subsegment(AwsNamespace("S3", "GetObject")) as session:
    ...     out = s3.get_object(Bucket="bucket", Key="key")
    ...     if (ns := session.namespace_mut()) is not None:
    ...         ns.request_id(out["ResponseMetadata"]["RequestId"])
"""

from xray_lite.client import (
    Client,
    DaemonClient,
    InfallibleClient,
    into_infallible_client,
    parse_daemon_address,
)
from xray_lite.context import (
    Context,
    InfallibleContext,
    SubsegmentContext,
    into_infallible_context,
)
from xray_lite.errors import (
    BadConfigError,
    HeaderParseError,
    MissingEnvVarError,
    TransportError,
    XRayError,
)
from xray_lite.factory import (
    client_from_settings,
    context_from_settings,
    current_settings,
    get_default_client,
)
from xray_lite.header import Header, SamplingDecision, format_header, parse
from xray_lite.ids import SegmentId, Seconds, TraceId
from xray_lite.interceptor import RequestClassifier, StaticClassifier, TraceInterceptor
from xray_lite.lambda_env import header as lambda_header
from xray_lite.namespace import AwsNamespace, CustomNamespace, Namespace, RemoteNamespace
from xray_lite.segment import AwsOperation, Http, Request, Response, Subsegment
from xray_lite.session import SubsegmentSession

__version__ = "0.1.0"

__all__ = [
    # Header codec
    "Header",
    "SamplingDecision",
    "parse",
    "format_header",
    "lambda_header",
    # Identifiers
    "TraceId",
    "SegmentId",
    "Seconds",
    # Segment model
    "Subsegment",
    "AwsOperation",
    "Http",
    "Request",
    "Response",
    # Transport
    "Client",
    "DaemonClient",
    "InfallibleClient",
    "into_infallible_client",
    "parse_daemon_address",
    # Namespaces
    "Namespace",
    "AwsNamespace",
    "RemoteNamespace",
    "CustomNamespace",
    # Sessions and contexts
    "SubsegmentSession",
    "Context",
    "SubsegmentContext",
    "InfallibleContext",
    "into_infallible_context",
    "client_from_settings",
    "context_from_settings",
    "current_settings",
    "get_default_client",
    # Request hooks
    "RequestClassifier",
    "StaticClassifier",
    "TraceInterceptor",
    # Errors
    "XRayError",
    "MissingEnvVarError",
    "BadConfigError",
    "HeaderParseError",
    "TransportError",
]
