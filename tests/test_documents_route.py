"""Tests for the submission gateway routes."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from crpt_api.adapters.transport import TransportResponse
from crpt_api.core.app_factory import create_app
from crpt_api.core.config import settings
from crpt_api.core.errors import TransportAppError
from crpt_api.core.submitter import get_document_submitter
from crpt_api.services.document_submitter import DocumentSubmitter

UPSTREAM = "https://crpt.test/api/v3"


@pytest.fixture
def app() -> FastAPI:
    return create_app()


def _use_submitter(app: FastAPI, submitter: DocumentSubmitter) -> TestClient:
    app.dependency_overrides[get_document_submitter] = lambda: submitter
    return TestClient(app)


def test_submit_forwards_document(app, transport) -> None:
    client = _use_submitter(app, DocumentSubmitter(60, 5, UPSTREAM, transport=transport))

    resp = client.post("/v1/documents", json={"document": {"inn": "123"}, "signature": "abc"})

    assert resp.status_code == 200
    assert resp.json() == {"status_code": 200, "body": {"value": "ok"}}
    assert transport.calls[0][2] == b'{"document":{"inn":"123"},"signature":"abc"}'


def test_non_json_upstream_body_returned_as_text(app, transport_factory) -> None:
    transport = transport_factory(response=TransportResponse(status_code=500, body=b"Internal error"))
    client = _use_submitter(app, DocumentSubmitter(60, 5, UPSTREAM, transport=transport))

    resp = client.post("/v1/documents", json={"document": {"inn": "1"}, "signature": "abc"})

    assert resp.status_code == 200
    assert resp.json() == {"status_code": 500, "body": "Internal error"}


def test_empty_signature_returns_400(app, transport) -> None:
    client = _use_submitter(app, DocumentSubmitter(60, 5, UPSTREAM, transport=transport))

    resp = client.post("/v1/documents", json={"document": {"inn": "1"}, "signature": ""})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_argument"
    assert transport.calls == []


def test_missing_signature_fails_request_validation(app, transport) -> None:
    client = _use_submitter(app, DocumentSubmitter(60, 5, UPSTREAM, transport=transport))

    resp = client.post("/v1/documents", json={"document": {"inn": "1"}})

    assert resp.status_code == 422
    assert transport.calls == []


def test_transport_failure_returns_502(app, transport_factory) -> None:
    transport = transport_factory(
        error=TransportAppError(code="transport_failed", message="connection refused")
    )
    client = _use_submitter(app, DocumentSubmitter(60, 5, UPSTREAM, transport=transport))

    resp = client.post("/v1/documents", json={"document": {"inn": "1"}, "signature": "abc"})

    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "transport_failed"


def test_saturated_window_returns_503_after_acquire_timeout(app, transport, monkeypatch) -> None:
    monkeypatch.setattr(settings.crpt, "acquire_timeout_seconds", 0.05)
    submitter = DocumentSubmitter(3600, 1, UPSTREAM, transport=transport)
    client = _use_submitter(app, submitter)
    payload = {"document": {"inn": "1"}, "signature": "abc"}

    assert client.post("/v1/documents", json=payload).status_code == 200
    resp = client.post("/v1/documents", json=payload)

    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "acquire_cancelled"
    assert resp.headers["Retry-After"] == "1"
    assert len(transport.calls) == 1


def test_health_reports_rate_limit_budget(app, transport) -> None:
    submitter = DocumentSubmitter(30, 4, UPSTREAM, transport=transport)
    submitter.submit({"inn": "1"}, "abc")
    client = _use_submitter(app, submitter)

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "rate_limit": {"limit": 4, "window_seconds": 30.0, "available": 3},
    }
