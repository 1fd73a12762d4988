from __future__ import annotations

import json

from fastapi import APIRouter, Depends

from crpt_api.adapters.transport import TransportResponse
from crpt_api.core.config import settings
from crpt_api.core.submitter import get_document_submitter
from crpt_api.schemas.document import DocumentSubmission, SubmissionResult
from crpt_api.services.document_submitter import DocumentSubmitter

router = APIRouter(tags=["Documents"])


def _decode_body(response: TransportResponse) -> object:
    if not response.body:
        return None
    try:
        return json.loads(response.body)
    except ValueError:
        return response.text


@router.post("/documents", response_model=SubmissionResult)
def submit_document(
    payload: DocumentSubmission,
    submitter: DocumentSubmitter = Depends(get_document_submitter),
) -> SubmissionResult:
    """Forward a document to the registration service.

    Declared as a plain function so FastAPI runs it in its threadpool: the
    call blocks while the rate limit window is saturated.

    Args:
        payload: Document and signature to submit.
        submitter: Shared, rate-limited submitter.

    Returns:
        SubmissionResult: Upstream status code and decoded body.
    """
    response = submitter.submit(
        payload.document,
        payload.signature,
        timeout=settings.crpt.acquire_timeout_seconds,
    )
    return SubmissionResult(status_code=response.status_code, body=_decode_body(response))
