"""Tests for redaction and JSON formatting of log records."""

from __future__ import annotations

import json
import logging
from io import StringIO

from crpt_api.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    set_request_id,
)


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_signature_and_document_are_redacted():
    logger, stream = _capture("test_submission_redaction")

    logger.info(
        "document.submitted",
        extra={
            "signature": "BASE64-SECRET",
            "document": {"inn": "7700000000"},
            "status_code": 200,
        },
    )

    record = json.loads(stream.getvalue())
    assert "BASE64-SECRET" not in stream.getvalue()
    assert "7700000000" not in stream.getvalue()
    assert record["signature"] == "[REDACTED]"
    assert record["document"] == "[REDACTED]"
    assert record["status_code"] == 200


def test_nested_sensitive_keys_are_redacted():
    logger, stream = _capture("test_nested_redaction")

    logger.info(
        "upstream.headers",
        extra={"headers": {"Authorization": "Bearer abc", "Accept": "application/json"}},
    )

    record = json.loads(stream.getvalue())
    assert record["headers"] == {"Authorization": "[REDACTED]", "Accept": "application/json"}


def test_request_id_from_context_is_attached():
    logger, stream = _capture("test_request_id")

    set_request_id("req-123")
    try:
        logger.info("rate_limit.acquired", extra={"waited_ms": 12.5, "limit": 10})
    finally:
        clear_request_id()

    record = json.loads(stream.getvalue())
    assert record["request_id"] == "req-123"
    assert record["message"] == "rate_limit.acquired"
    assert record["level"] == "info"
    assert record["waited_ms"] == 12.5
