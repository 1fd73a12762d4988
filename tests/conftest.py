"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before anything imports ``crpt_api.core.config``
so the global settings never point at the real registration service.
"""

import os

# Must run before settings are imported: keeps .env files out of the test run
os.environ["TESTING"] = "true"

os.environ.setdefault("CRPT_BASE_URL", "https://crpt.test/api/v3")
os.environ.setdefault("CRPT_WINDOW_SECONDS", "60")
os.environ.setdefault("CRPT_REQUEST_LIMIT", "10")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Mapping

import pytest

from crpt_api.adapters.transport.base import AbstractTransport, TransportResponse


class RecordingTransport(AbstractTransport):
    """Transport double that records requests and replays a canned reply."""

    def __init__(
        self,
        response: TransportResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response or TransportResponse(status_code=200, body=b'{"value":"ok"}')
        self.error = error
        self.calls: list[tuple[str, dict[str, str], bytes]] = []
        self.closed = False

    def send(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        self.calls.append((url, dict(headers), body))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def transport_factory() -> type[RecordingTransport]:
    return RecordingTransport
