"""Shared fixtures for the X-Ray client tests."""

from typing import Any

import pytest

from xray_lite.errors import TransportError
from xray_lite.header import parse
from xray_lite.segment import Subsegment

TRACE_HEADER = "Root=1-5759e988-bd862e3fe1be46a994272793;Parent=53995c3f42cd8ad8;Sampled=1"


class RecordingClient:
    """Client that keeps a snapshot of every segment it is asked to send."""

    def __init__(self) -> None:
        self.sent: list[Subsegment] = []

    def send(self, data: Any) -> None:
        self.sent.append(data.model_copy(deep=True))


class FailingClient:
    """Client whose sends always fail."""

    def __init__(self) -> None:
        self.attempts = 0

    def send(self, data: Any) -> None:
        self.attempts += 1
        raise TransportError("daemon unreachable")


class FailOnSecondSendClient(RecordingClient):
    """Client that accepts the first send and fails every later one."""

    def send(self, data: Any) -> None:
        if self.sent:
            raise TransportError("send buffer full")
        super().send(data)


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def failing_client() -> FailingClient:
    return FailingClient()


@pytest.fixture
def trace_header():
    return parse(TRACE_HEADER)


@pytest.fixture
def flaky_client() -> FailOnSecondSendClient:
    return FailOnSecondSendClient()
