"""Application-level exception types.

This module defines the domain errors raised by the rate limiter, the document
submitter and its collaborators, enabling consistent error handling, logging,
and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional; ``context`` carries the failing operation name so the
    failure stage can be told apart.
    """

    code: str
    message: str
    hint: str
    http_status: int
    retry_after: float
    timeout_seconds: float
    url: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ConfigurationAppError(AppError):
    """Raised when a limiter or submitter is constructed with invalid settings."""


class ValidationAppError(AppError):
    """Raised when caller input is missing or invalid."""


class CancelledAppError(AppError):
    """Raised when a wait for an admission slot is abandoned."""


class SerializationAppError(AppError):
    """Raised when a submission payload cannot be encoded as JSON."""


class TransportAppError(AppError):
    """Raised when the HTTP call to the registration service fails."""
