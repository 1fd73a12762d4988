"""Application factory for the submission gateway.

Centralizes app construction (metadata, middleware, handlers, routers and the
shared submitter's lifecycle) to keep tests free to build fresh apps.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from crpt_api.api.routes import documents_router, health_router
from crpt_api.core.config import settings
from crpt_api.core.exception_handlers import setup_exception_handlers
from crpt_api.core.logging import configure_logging
from crpt_api.core.middleware import request_id_middleware
from crpt_api.core.submitter import close_document_submitter


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # Wake requests still blocked on the rate limiter so shutdown isn't held up.
    close_document_submitter()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="CRPT Document Gateway",
        description=(
            "Forwards signed documents to the CRPT registration API while "
            "enforcing a rolling-window cap on submissions. Requests over the "
            "cap wait for a free slot instead of being rejected."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(documents_router, prefix="/v1")
    app.include_router(health_router)

    return app
