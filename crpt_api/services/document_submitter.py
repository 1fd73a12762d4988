"""Rate-limited document submission to the registration service.

This service is the only entry point for sending documents. Each call:
- Validates the document and signature before touching shared state
- Waits for a slot in the rolling rate limit window
- Serializes the payload and POSTs it as JSON
- Returns the service reply unmodified (no retries)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sized
from datetime import timedelta
from typing import Any

import httpx

from crpt_api.adapters.rate_limit import AbstractRateLimiter, SlidingWindowRateLimiter
from crpt_api.adapters.transport import AbstractTransport, HttpxTransport, TransportResponse
from crpt_api.core.config import DEFAULT_BASE_URL, CrptSettings, settings
from crpt_api.core.errors import ConfigurationAppError, TransportAppError, ValidationAppError
from crpt_api.services.payload import build_submission_body

logger = logging.getLogger(__name__)

JSON_HEADERS: Mapping[str, str] = {"Content-Type": "application/json"}


def _validate_submission(document: Any, signature: Any) -> None:
    """Reject missing documents or signatures.

    Raises:
        ValidationAppError: If document is None/empty or signature is not a
            non-empty string.
    """
    if document is None or (isinstance(document, Sized) and len(document) == 0):
        raise ValidationAppError(
            code="invalid_argument",
            message="document must be a non-empty value",
            details={"context": {"operation": "submit", "field": "document"}},
        )
    if not isinstance(signature, str) or not signature.strip():
        raise ValidationAppError(
            code="invalid_argument",
            message="signature must be a non-empty string",
            details={"context": {"operation": "submit", "field": "signature"}},
        )


def _validate_base_url(base_url: str) -> str:
    """Return ``base_url`` if it is an absolute http(s) URL.

    Raises:
        ConfigurationAppError: If the URL is empty, malformed, or relative.
    """
    try:
        url = httpx.URL(base_url) if base_url else None
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigurationAppError(
            code="invalid_configuration",
            message=f"base_url is not a valid URL: {exc}",
        ) from exc

    if url is None or url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationAppError(
            code="invalid_configuration",
            message="base_url must be an absolute http(s) URL",
            details={"context": {"base_url": repr(base_url)}},
        )
    return base_url


class DocumentSubmitter:
    """Client for the document registration endpoint.

    Owns its rate limiter and HTTP transport for its whole lifetime; share one
    instance between threads so they are throttled together.

    Attributes:
        base_url: Endpoint receiving the POST requests.
        rate_limiter: Admission control applied before every request.
        transport: HTTP adapter performing the call.
    """

    def __init__(
        self,
        window: timedelta | float,
        limit: int,
        base_url: str = DEFAULT_BASE_URL,
        *,
        transport: AbstractTransport | None = None,
    ) -> None:
        """Initialize the submitter.

        Args:
            window: Rolling window length (timedelta or seconds).
            limit: Maximum submissions per window.
            base_url: Registration endpoint; defaults to the public API.
            transport: HTTP adapter; an ``HttpxTransport`` when omitted.

        Raises:
            ConfigurationAppError: If window/limit are not positive or the
                base URL is not an absolute http(s) URL.
        """
        self.base_url = _validate_base_url(base_url)
        self.rate_limiter: AbstractRateLimiter = SlidingWindowRateLimiter(window, limit)
        self.transport = transport or HttpxTransport()

    def submit(
        self,
        document: Any,
        signature: str,
        *,
        timeout: float | None = None,
    ) -> TransportResponse:
        """Send one document, waiting for rate limit capacity first.

        Args:
            document: Structured document payload.
            signature: Signature of the document.
            timeout: Maximum seconds to wait for a rate limit slot.

        Returns:
            TransportResponse: Status code and body exactly as received.

        Raises:
            ValidationAppError: Missing document or signature (nothing sent).
            CancelledAppError: The wait for a slot was abandoned (nothing sent).
            SerializationAppError: The document is not JSON-serializable.
            TransportAppError: The HTTP call failed.
        """
        _validate_submission(document, signature)

        self.rate_limiter.acquire(timeout=timeout)

        body = build_submission_body(document, signature)

        started = time.perf_counter()
        try:
            response = self.transport.send(self.base_url, JSON_HEADERS, body)
        except TransportAppError as exc:
            logger.warning(
                "document.transport_failed",
                extra={
                    "error_code": exc.code,
                    "error_message": exc.message,
                    "url": self.base_url,
                },
            )
            raise

        logger.info(
            "document.submitted",
            extra={
                "status_code": response.status_code,
                "body_bytes": len(body),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                "url": self.base_url,
            },
        )
        return response

    def close(self) -> None:
        """Cancel pending waits and release the HTTP connection pool."""
        self.rate_limiter.shutdown()
        self.transport.close()

    def __enter__(self) -> "DocumentSubmitter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_document_submitter(crpt_settings: CrptSettings | None = None) -> DocumentSubmitter:
    """Factory building a submitter from configuration.

    Reads ``crpt_api.core.config.settings.crpt`` unless explicit settings are
    given.

    Returns:
        DocumentSubmitter: Ready-to-use submitter with an httpx transport.
    """
    cfg = crpt_settings or settings.crpt
    return DocumentSubmitter(
        window=cfg.window_seconds,
        limit=cfg.request_limit,
        base_url=cfg.base_url,
        transport=HttpxTransport(timeout_seconds=cfg.timeout_seconds),
    )
