"""Process-wide document submitter for the HTTP layer.

All gateway requests must share one submitter: the rate limit only holds if
every submission goes through the same admission log. The submitter is built
from settings on first use and kept until ``close_document_submitter()``;
later settings changes do not replace it, since a fresh admission log would
forget the admissions already made in the current window.
"""

from __future__ import annotations

import logging
import threading

from crpt_api.core.config import settings
from crpt_api.services.document_submitter import DocumentSubmitter, create_document_submitter

logger = logging.getLogger(__name__)


_submitter: DocumentSubmitter | None = None
_submitter_lock = threading.Lock()


def get_document_submitter() -> DocumentSubmitter:
    """Return the process-wide submitter, building it on first use.

    Returns:
        DocumentSubmitter: Shared submitter instance.
    """

    global _submitter

    with _submitter_lock:
        if _submitter is None:
            cfg = settings.crpt
            _submitter = create_document_submitter(cfg)
            logger.info(
                "submitter.created",
                extra={
                    "url": cfg.base_url,
                    "limit": cfg.request_limit,
                    "window_s": cfg.window_seconds,
                },
            )
        return _submitter


def close_document_submitter() -> None:
    """Close the shared submitter, cancelling requests still waiting for a slot."""

    global _submitter

    with _submitter_lock:
        if _submitter is not None:
            _submitter.close()
        _submitter = None
