"""Tracing contexts.

A context holds the client and the current trace header, and hands out
subsegment sessions nested under that header.

Example:
    >>> client = InfallibleClient.from_factory(DaemonClient.from_lambda_env)
    >>> context = InfallibleContext.from_factory(
    ...     lambda: SubsegmentContext.from_lambda_env(client).with_name_prefix("app.")
    ... )
    >>> with context.enter_subsegment(CustomNamespace("do_something")):
    ...     ...
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Protocol, TypeVar

from xray_lite import lambda_env
from xray_lite.client import Client
from xray_lite.errors import XRayError
from xray_lite.header import Header
from xray_lite.namespace import Namespace
from xray_lite.session import SubsegmentSession
from xray_lite.telemetry import CONTEXT_UNAVAILABLE, get_logger

log = get_logger(__name__)

N = TypeVar("N", bound=Namespace)


class Context(Protocol):
    """Source of subsegment sessions."""

    def enter_subsegment(self, namespace: N) -> SubsegmentSession[N]:
        """Enter a new subsegment described by ``namespace``.

        The subsegment is reported as finished when the returned session
        is closed.
        """
        ...


@dataclass(frozen=True)
class SubsegmentContext:
    """Context whose subsegments nest under an existing segment.

    Attributes:
        client: Client used to report subsegments.
        header: Trace header of the enclosing segment.
        name_prefix: Prepended to the names of custom subsegments.
    """

    client: Client
    header: Header
    name_prefix: str = ""

    @classmethod
    def from_lambda_env(cls, client: Client) -> "SubsegmentContext":
        """Create a context from ``_X_AMZN_TRACE_ID``.

        Raises:
            MissingEnvVarError: If the variable is not set.
            BadConfigError: If the header cannot be parsed.
        """
        return cls(client=client, header=lambda_env.header())

    def with_name_prefix(self, prefix: str) -> "SubsegmentContext":
        """Return a copy whose custom subsegment names start with ``prefix``."""
        return replace(self, name_prefix=prefix)

    def enter_subsegment(self, namespace: N) -> SubsegmentSession[N]:
        return SubsegmentSession.enter(self.client, self.header, namespace, self.name_prefix)


class InfallibleContext:
    """Context that never fails to construct.

    Holds either an operational context or nothing. Without an operational
    context every session is Failed, so traced code runs untouched.
    """

    def __init__(self, context: Context | None = None) -> None:
        self.context = context

    @classmethod
    def from_factory(cls, factory: Callable[[], Context]) -> "InfallibleContext":
        """Build a context, falling back to no-op if construction fails.

        Args:
            factory: Callable constructing the underlying context.
        """
        try:
            return cls(factory())
        except XRayError as e:
            log.warning(CONTEXT_UNAVAILABLE, error=str(e), error_type=type(e).__name__)
            return cls.noop()

    @classmethod
    def noop(cls) -> "InfallibleContext":
        return cls(None)

    @property
    def is_noop(self) -> bool:
        return self.context is None

    def enter_subsegment(self, namespace: N) -> SubsegmentSession[N]:
        if self.context is None:
            return SubsegmentSession.failed()
        return self.context.enter_subsegment(namespace)

    def __repr__(self) -> str:
        if self.context is None:
            return "InfallibleContext.Noop"
        return f"InfallibleContext.Op({self.context!r})"


def into_infallible_context(factory: Callable[[], Context]) -> InfallibleContext:
    """Shorthand for InfallibleContext.from_factory()."""
    return InfallibleContext.from_factory(factory)
