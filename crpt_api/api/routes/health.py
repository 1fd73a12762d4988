from __future__ import annotations

from fastapi import APIRouter, Depends

from crpt_api.core.submitter import get_document_submitter
from crpt_api.services.document_submitter import DocumentSubmitter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    submitter: DocumentSubmitter = Depends(get_document_submitter),
) -> dict:
    """Health check endpoint.

    Reports liveness together with the rate limit budget left in the current
    window, which tells operators whether submissions are being throttled.

    Returns:
        dict: ``status`` plus ``rate_limit`` with limit, window and free slots.
    """

    limiter = submitter.rate_limiter
    return {
        "status": "ok",
        "rate_limit": {
            "limit": limiter.limit,
            "window_seconds": limiter.window_seconds,
            "available": limiter.available(),
        },
    }
