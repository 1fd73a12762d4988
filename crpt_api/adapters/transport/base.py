from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class TransportResponse:
    """Raw reply from the registration service.

    Attributes:
        status_code: HTTP status code, returned as-is (non-2xx included).
        body: Undecoded response body.
    """

    status_code: int
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class AbstractTransport(ABC):
    """Interface for the synchronous HTTP call made per submission."""

    @abstractmethod
    def send(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """POST ``body`` to ``url``.

        Args:
            url: Absolute endpoint URL.
            headers: Request headers (e.g. Content-Type).
            body: Encoded request body.

        Returns:
            TransportResponse: Status code and body of the reply.

        Raises:
            TransportAppError: If no response could be obtained.
        """
        ...

    def close(self) -> None:
        """Release pooled connections. No-op by default."""
