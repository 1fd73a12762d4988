"""Serialization of submission bodies."""

from __future__ import annotations

import json
from typing import Any

from pydantic_core import PydanticSerializationError

from crpt_api.core.errors import SerializationAppError
from crpt_api.schemas.document import DocumentSubmission


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def build_submission_body(document: Any, signature: str) -> bytes:
    """Encode a document and its signature as compact UTF-8 JSON.

    Args:
        document: Structured value (mapping, list, pydantic model, ...).
        signature: Signature string.

    Returns:
        bytes: ``{"document": ..., "signature": ...}`` in that key order.

    Raises:
        SerializationAppError: If the document cannot be represented as JSON
            (cyclic structure, unsupported object type, NaN or infinity).
    """
    try:
        body = DocumentSubmission(document=document, signature=signature).model_dump_json()
        # NaN/Infinity come out as bare tokens; strict JSON has no encoding for them.
        json.loads(body, parse_constant=_reject_constant)
    except (PydanticSerializationError, ValueError, TypeError) as exc:
        raise SerializationAppError(
            code="serialization_failed",
            message=f"Document could not be serialized to JSON: {exc}",
            details={
                "context": {
                    "operation": "serialize",
                    "document_type": type(document).__name__,
                }
            },
        ) from exc
    return body.encode("utf-8")
