"""Submit one sample document using the configured endpoint and limits.

Run with ``python -m crpt_api``.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

from crpt_api.core.config import settings
from crpt_api.core.errors import AppError
from crpt_api.core.logging import configure_logging
from crpt_api.services.document_submitter import create_document_submitter

logger = logging.getLogger("crpt_api")

SAMPLE_SIGNATURE = "BASE64_SIGNATURE_STRING"


def main() -> int:
    configure_logging(settings.log)

    document = {
        "inn": "1234567890",
        "productCode": "01234567890123",
        "quantity": 100,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    with create_document_submitter() as submitter:
        try:
            response = submitter.submit(document, SAMPLE_SIGNATURE)
        except AppError as exc:
            logger.error("demo.failed", extra={"error_code": exc.code, "error_message": exc.message})
            return 1

    print(f"Status: {response.status_code}")
    print(f"Body: {response.text}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
