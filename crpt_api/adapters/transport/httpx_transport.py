"""httpx-based transport adapter."""

from __future__ import annotations

from typing import Mapping

import httpx

from crpt_api.adapters.transport.base import AbstractTransport, TransportResponse
from crpt_api.core.errors import TransportAppError


class HttpxTransport(AbstractTransport):
    """Send submissions through a pooled, synchronous ``httpx.Client``.

    The client is thread-safe, so one instance is shared by every caller of
    the owning submitter.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            timeout_seconds: Connect/read/write timeout in seconds.
            client: Preconfigured client (tests pass one backed by
                ``httpx.MockTransport``). Created when omitted.
        """
        self.client = client or httpx.Client(timeout=timeout_seconds)
        self.timeout_seconds = timeout_seconds

    def send(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """POST the body and return the reply without interpreting the status.

        Raises:
            TransportAppError: On connection errors, timeouts, a malformed
                URL, or an unreadable response.
        """
        try:
            response = self.client.post(url, headers=dict(headers), content=body)
            content = response.read()
        except httpx.TimeoutException as exc:
            raise TransportAppError(
                code="transport_timeout",
                message=f"Registration service did not respond within {self.timeout_seconds}s",
                details={
                    "url": url,
                    "timeout_seconds": self.timeout_seconds,
                    "context": {"operation": "send", "error_type": type(exc).__name__},
                },
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportAppError(
                code="transport_failed",
                message=f"Registration service request failed: {exc}",
                details={
                    "url": url,
                    "context": {"operation": "send", "error_type": type(exc).__name__},
                },
            ) from exc

        return TransportResponse(status_code=response.status_code, body=content)

    def close(self) -> None:
        self.client.close()
