"""Pydantic schemas for document submissions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentSubmission(BaseModel):
    """Request body sent to the registration service.

    Field order is significant: the service receives ``document`` first,
    then ``signature``. Non-finite floats are written as bare ``NaN`` /
    ``Infinity`` tokens so the serializer can reject them instead of
    silently turning them into ``null``.
    """

    model_config = ConfigDict(ser_json_inf_nan="constants")

    document: Any = Field(
        ..., description="Document payload, forwarded as-is."
    )
    signature: str = Field(
        ..., description="Detached signature of the document (e.g. base64)."
    )


class SubmissionResult(BaseModel):
    """Gateway response wrapping the registration service reply."""

    status_code: int = Field(
        ..., description="HTTP status code returned by the registration service."
    )
    body: Any = Field(
        default=None,
        description="Reply body: parsed JSON when possible, otherwise text.",
    )
