"""HTTP transport layer - abstracts the call to the registration service."""

from crpt_api.adapters.transport.base import AbstractTransport, TransportResponse
from crpt_api.adapters.transport.httpx_transport import HttpxTransport

__all__ = [
    "AbstractTransport",
    "HttpxTransport",
    "TransportResponse",
]
