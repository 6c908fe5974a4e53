"""Hook surface for tracing outbound requests of any client framework.

Client frameworks that expose request hooks (before the attempt, before the
request is transmitted, after the attempt) can trace each outbound call as
an AWS subsegment by forwarding those hooks to a TraceInterceptor. Which
service and operation a request targets is decided by a RequestClassifier.

Every hook is best effort: tracing problems are logged and never raised to
the framework.
"""

from collections.abc import MutableMapping
from typing import Any, Protocol

from xray_lite.context import Context
from xray_lite.header import Header
from xray_lite.namespace import AwsNamespace
from xray_lite.session import SubsegmentSession
from xray_lite.telemetry import INTERCEPTOR_HOOK_FAILED, get_logger

log = get_logger(__name__)


class RequestClassifier(Protocol):
    """Strategy identifying the AWS service operation a request targets."""

    def classify_request(self, request: Any) -> AwsNamespace | None:
        """Return a namespace for the request, or None if it is not recognized."""
        ...


class StaticClassifier:
    """Classifier that attributes every request to one service operation."""

    def __init__(self, service: str, operation: str) -> None:
        self.service = service
        self.operation = operation

    def classify_request(self, request: Any) -> AwsNamespace | None:
        return AwsNamespace(self.service, self.operation)


class TraceInterceptor:
    """Traces one outbound request at a time as an AWS subsegment.

    Hooks are expected in order: before_attempt(), before_transmit(),
    after_attempt(). A new before_attempt() closes any session left open by
    a previous attempt.
    """

    def __init__(self, context: Context, classifier: RequestClassifier) -> None:
        self.context = context
        self.classifier = classifier
        self._session: SubsegmentSession[AwsNamespace] | None = None

    @property
    def session(self) -> SubsegmentSession[AwsNamespace] | None:
        return self._session

    def before_attempt(self, request: Any) -> None:
        """Classify the request and enter its subsegment."""
        try:
            self._close_session()
            namespace = self.classifier.classify_request(request)
            if namespace is not None:
                self._session = self.context.enter_subsegment(namespace)
        except Exception as e:
            log.warning(INTERCEPTOR_HOOK_FAILED, hook="before_attempt", error=str(e))

    def before_transmit(self, headers: MutableMapping[str, str]) -> None:
        """Inject the trace header into the outbound request headers."""
        try:
            trace_id = self._session.x_amzn_trace_id() if self._session is not None else None
            if trace_id is not None:
                headers[Header.NAME] = trace_id
        except Exception as e:
            log.warning(INTERCEPTOR_HOOK_FAILED, hook="before_transmit", error=str(e))

    def after_attempt(self, status: int | None = None, request_id: str | None = None) -> None:
        """Record response details and report the finished subsegment.

        Args:
            status: HTTP status of the response, if one was received.
            request_id: Request id returned by the service, if any.
        """
        try:
            if self._session is not None:
                namespace = self._session.namespace_mut()
                if namespace is not None:
                    if status is not None:
                        namespace.response_status(status)
                    if request_id is not None:
                        namespace.request_id(request_id)
            self._close_session()
        except Exception as e:
            log.warning(INTERCEPTOR_HOOK_FAILED, hook="after_attempt", error=str(e))

    def _close_session(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            session.close()
