"""Namespaces decorate subsegments with domain-specific fields.

A namespace gives a subsegment its display name and fills in the fields
that describe what the subsegment traced: an AWS service operation, a call
to an arbitrary remote service, or nothing at all for custom work.

Namespaces are applied twice per subsegment, once when it is entered and
once when it ends. Every field is written with set-if-absent semantics, so
values captured after entry (response status, request id) are added on the
second pass without disturbing the first.
"""

from typing import Protocol

from xray_lite.segment import Subsegment


class Namespace(Protocol):
    """Decoration strategy for a subsegment."""

    def name(self, prefix: str) -> str:
        """Display name of the subsegment. ``prefix`` may be ignored."""
        ...

    def update_subsegment(self, subsegment: Subsegment) -> None:
        """Merge this namespace's fields into the subsegment."""
        ...


class AwsNamespace:
    """Namespace for an AWS service operation.

    The subsegment is named after the service and carries the operation in
    its ``aws`` block.

    Example:
        >>> ns = AwsNamespace("S3", "GetObject")
        >>> ns.request_id("abc").response_status(200)
    """

    def __init__(self, service: str, operation: str) -> None:
        self.service = service
        self.operation = operation
        self._request_id: str | None = None
        self._response_status: int | None = None

    def request_id(self, request_id: str) -> "AwsNamespace":
        """Record the request id returned by the service."""
        self._request_id = request_id
        return self

    def response_status(self, status: int) -> "AwsNamespace":
        """Record the HTTP status of the service response."""
        self._response_status = status
        return self

    def name(self, prefix: str) -> str:
        return self.service

    def update_subsegment(self, subsegment: Subsegment) -> None:
        subsegment.set_namespace("aws")
        subsegment.set_aws(operation=self.operation, request_id=self._request_id)
        subsegment.set_http_response(self._response_status)

    def __repr__(self) -> str:
        return f"AwsNamespace(service={self.service!r}, operation={self.operation!r})"


class RemoteNamespace:
    """Namespace for a call to an arbitrary remote service."""

    def __init__(self, name: str, method: str, url: str) -> None:
        self._name = name
        self.method = method
        self.url = url
        self._response_status: int | None = None

    def response_status(self, status: int) -> "RemoteNamespace":
        """Record the HTTP status of the response."""
        self._response_status = status
        return self

    def name(self, prefix: str) -> str:
        return self._name

    def update_subsegment(self, subsegment: Subsegment) -> None:
        subsegment.set_namespace("remote")
        subsegment.set_http_request(method=self.method, url=self.url)
        subsegment.set_http_response(self._response_status)

    def __repr__(self) -> str:
        return f"RemoteNamespace(name={self._name!r}, method={self.method!r}, url={self.url!r})"


class CustomNamespace:
    """Namespace for custom work; only the name is recorded.

    This is the only namespace that honors the context's name prefix.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    def name(self, prefix: str) -> str:
        return f"{prefix}{self._name}"

    def update_subsegment(self, subsegment: Subsegment) -> None:
        return None

    def __repr__(self) -> str:
        return f"CustomNamespace(name={self._name!r})"
