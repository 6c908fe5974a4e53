"""Subsegment session lifecycle.

A session is created by entering a subsegment. Entering builds the
subsegment, lets the namespace decorate it and sends it as in progress. If
all of that succeeds the session is Entered; if any step raises it is Failed
for its whole lifetime and does nothing further.

Closing an Entered session ends the subsegment, decorates it again (picking
up anything recorded on the namespace in the meantime) and sends it once
more. Close failures are logged and never raised.

Usage:
    >>> with context.enter_subsegment(AwsNamespace("S3", "GetObject")) as session:
    ...     header = session.x_amzn_trace_id()
    ...     ...
    ...     if (ns := session.namespace_mut()) is not None:
    ...         ns.request_id(request_id)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from xray_lite.client import Client
from xray_lite.header import Header
from xray_lite.namespace import Namespace
from xray_lite.segment import Subsegment
from xray_lite.telemetry import (
    SUBSEGMENT_CLOSE_FAILED,
    SUBSEGMENT_CLOSED,
    SUBSEGMENT_ENTER_FAILED,
    SUBSEGMENT_ENTERED,
    get_logger,
)

log = get_logger(__name__)

N = TypeVar("N", bound=Namespace)


@dataclass
class Entered(Generic[N]):
    """State of a session whose subsegment reached the daemon."""

    client: Client
    header: Header
    subsegment: Subsegment
    namespace: N


@dataclass(frozen=True)
class Failed:
    """State of a session that could not be started."""


class SubsegmentSession(Generic[N]):
    """Session for a single subsegment.

    Use as a context manager, or call close() when the traced work is done.
    Closing more than once is harmless; only the first close of an Entered
    session reports the subsegment.
    """

    def __init__(self, state: "Entered[N] | Failed") -> None:
        self._state = state
        self._closed = False

    @classmethod
    def enter(
        cls, client: Client, header: Header, namespace: N, name_prefix: str = ""
    ) -> "SubsegmentSession[N]":
        """Begin a subsegment and report it as in progress.

        Args:
            client: Client to send the subsegment with.
            header: Current trace header; supplies trace id and parent id.
            namespace: Namespace naming and decorating the subsegment.
            name_prefix: Prefix offered to the namespace for the name.

        Returns:
            Entered session if the subsegment was built and sent, Failed
            session otherwise.
        """
        try:
            subsegment = Subsegment.begin(
                header.trace_id, header.parent_id, namespace.name(name_prefix)
            )
            namespace.update_subsegment(subsegment)
            client.send(subsegment)
        except Exception as e:
            log.debug(
                SUBSEGMENT_ENTER_FAILED,
                namespace=type(namespace).__name__,
                error=str(e),
                error_type=type(e).__name__,
            )
            return cls.failed()

        log.debug(
            SUBSEGMENT_ENTERED,
            subsegment=subsegment.name,
            trace_id=str(subsegment.trace_id),
            segment_id=str(subsegment.id),
        )
        return cls(
            Entered(
                client=client,
                header=header.with_parent_id(subsegment.id),
                subsegment=subsegment,
                namespace=namespace,
            )
        )

    @classmethod
    def failed(cls) -> "SubsegmentSession[N]":
        """Return a session in the Failed state."""
        return cls(Failed())

    @property
    def state(self) -> "Entered[N] | Failed":
        return self._state

    @property
    def is_entered(self) -> bool:
        return isinstance(self._state, Entered)

    def x_amzn_trace_id(self) -> str | None:
        """Header value to propagate to downstream calls.

        Returns:
            Formatted header with this subsegment as parent, or None if the
            session failed.
        """
        match self._state:
            case Entered(header=header):
                return str(header)
            case _:
                return None

    def namespace_mut(self) -> N | None:
        """Namespace of the live subsegment, for recording response details.

        Returns:
            The namespace, or None if the session failed.
        """
        match self._state:
            case Entered(namespace=namespace):
                return namespace
            case _:
                return None

    def close(self) -> None:
        """End the subsegment and report it. Never raises."""
        if self._closed:
            return
        self._closed = True

        match self._state:
            case Entered(client=client, subsegment=subsegment, namespace=namespace):
                subsegment.end()
                try:
                    namespace.update_subsegment(subsegment)
                    client.send(subsegment)
                except Exception as e:
                    log.warning(
                        SUBSEGMENT_CLOSE_FAILED,
                        subsegment=subsegment.name,
                        segment_id=str(subsegment.id),
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    return
                log.debug(
                    SUBSEGMENT_CLOSED,
                    subsegment=subsegment.name,
                    segment_id=str(subsegment.id),
                    duration_s=subsegment.end_time - subsegment.start_time
                    if subsegment.end_time is not None
                    else None,
                )
            case Failed():
                pass

    def __enter__(self) -> "SubsegmentSession[N]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        match self._state:
            case Entered(subsegment=subsegment):
                return f"SubsegmentSession.Entered(name={subsegment.name!r}, id={subsegment.id})"
            case _:
                return "SubsegmentSession.Failed"
