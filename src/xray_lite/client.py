"""X-Ray daemon client.

Segments are sent to the daemon as single UDP datagrams:

    {"format": "json", "version": 1}\\n<segment JSON>

The socket is non-blocking and sends are never retried. A full send buffer
or a missing listener surfaces immediately as a TransportError.
"""

import json
import os
import socket
from collections.abc import Callable
from typing import Any, Protocol

from pydantic import BaseModel

from xray_lite.errors import BadConfigError, MissingEnvVarError, TransportError, XRayError
from xray_lite.telemetry import CLIENT_UNAVAILABLE, SEGMENT_SEND_FAILED, SEGMENT_SENT, get_logger

log = get_logger(__name__)

DAEMON_ADDRESS_ENV = "AWS_XRAY_DAEMON_ADDRESS"

PACKET_HEADER = b'{"format": "json", "version": 1}'
PACKET_DELIMITER = b"\n"


class Client(Protocol):
    """Anything that can deliver a segment to a daemon."""

    def send(self, data: Any) -> None:
        """Send a segment.

        Raises:
            TransportError: If the segment cannot be encoded or sent.
        """
        ...


def parse_daemon_address(address: str) -> tuple[str, int]:
    """Split a ``host:port`` daemon address.

    Args:
        address: Address such as ``127.0.0.1:2000`` or ``[::1]:2000``.

    Returns:
        Tuple of (host, port).

    Raises:
        BadConfigError: If the address is not a host followed by a valid port.
    """
    host, sep, port_text = address.strip().rpartition(":")
    if not sep or not host:
        raise BadConfigError(f"invalid X-Ray daemon address: {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_text)
    except ValueError as e:
        raise BadConfigError(f"invalid X-Ray daemon address: {address!r}") from e
    if not 0 < port < 65536:
        raise BadConfigError(f"invalid X-Ray daemon port: {port}")
    return host, port


def encode(data: Any) -> bytes:
    """Encode a segment (pydantic model or JSON-compatible value) as compact JSON."""
    if isinstance(data, BaseModel):
        return data.model_dump_json(exclude_none=True).encode("utf-8")
    return json.dumps(data, separators=(",", ":")).encode("utf-8")


class DaemonClient:
    """Client connected to an X-Ray daemon over UDP.

    Copies of a DaemonClient share the same socket. Each send() is one
    self-contained datagram write, so a single client may be used from many
    sessions and threads at once.
    """

    def __init__(self, address: tuple[str, int]) -> None:
        """Bind a UDP socket and connect it to the daemon.

        The address family follows the first resolved address of the host, so
        IPv6 literals and IPv6-only host names both work.

        Args:
            address: Daemon (host, port).

        Raises:
            TransportError: If the host cannot be resolved or the socket
                cannot be created or connected.
        """
        self.address = address
        try:
            family, _, _, _, sockaddr = socket.getaddrinfo(
                address[0], address[1], type=socket.SOCK_DGRAM
            )[0]
            self._socket = socket.socket(family, socket.SOCK_DGRAM)
            self._socket.setblocking(False)
            self._socket.connect(sockaddr)
        except OSError as e:
            raise TransportError(f"failed to connect to X-Ray daemon at {address}") from e

    @classmethod
    def from_lambda_env(cls) -> "DaemonClient":
        """Create a client from ``AWS_XRAY_DAEMON_ADDRESS``.

        Raises:
            MissingEnvVarError: If the variable is not set.
            BadConfigError: If the address cannot be parsed.
        """
        address = os.environ.get(DAEMON_ADDRESS_ENV)
        if address is None:
            raise MissingEnvVarError(DAEMON_ADDRESS_ENV)
        return cls(parse_daemon_address(address))

    @staticmethod
    def packet(data: Any) -> bytes:
        """Build the datagram payload for a segment.

        Raises:
            TransportError: If the segment cannot be JSON encoded.
        """
        try:
            body = encode(data)
        except (TypeError, ValueError) as e:
            raise TransportError("failed to encode segment") from e
        return PACKET_HEADER + PACKET_DELIMITER + body

    def send(self, data: Any) -> None:
        """Send a segment as a single datagram.

        Raises:
            TransportError: If encoding or the socket write fails.
        """
        payload = self.packet(data)
        address = f"{self.address[0]}:{self.address[1]}"
        try:
            self._socket.send(payload)
        except OSError as e:
            log.debug(SEGMENT_SEND_FAILED, address=address, error=str(e))
            raise TransportError(f"failed to send segment to {address}") from e
        log.debug(SEGMENT_SENT, address=address, size=len(payload))

    def close(self) -> None:
        self._socket.close()

    def __enter__(self) -> "DaemonClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"DaemonClient(address={self.address!r})"


class InfallibleClient:
    """Client that never fails to construct.

    Wraps either an operational client or nothing. The no-op variant accepts
    and drops every segment, so sessions still enter and propagate trace
    headers even when no daemon is configured.
    """

    def __init__(self, client: Client | None = None) -> None:
        self.client = client

    @classmethod
    def from_factory(cls, factory: Callable[[], Client]) -> "InfallibleClient":
        """Build a client, falling back to no-op if construction fails.

        Args:
            factory: Callable that constructs the underlying client, e.g.
                DaemonClient.from_lambda_env.
        """
        try:
            return cls(factory())
        except XRayError as e:
            log.warning(CLIENT_UNAVAILABLE, error=str(e), error_type=type(e).__name__)
            return cls.noop()

    @classmethod
    def noop(cls) -> "InfallibleClient":
        return cls(None)

    @property
    def is_noop(self) -> bool:
        return self.client is None

    def send(self, data: Any) -> None:
        if self.client is None:
            return
        self.client.send(data)

    def __repr__(self) -> str:
        if self.client is None:
            return "InfallibleClient.Noop"
        return f"InfallibleClient.Op({self.client!r})"


def into_infallible_client(factory: Callable[[], Client]) -> InfallibleClient:
    """Shorthand for InfallibleClient.from_factory()."""
    return InfallibleClient.from_factory(factory)
