"""ASGI entry-point for the FastAPI application.

This module
1. instantiates the :class:`fastapi.FastAPI` application;
2. loads :class:`~meeting_notes.config.Settings` once and wires the
   summarization client and request handler from it;
3. registers global exception handlers and middleware.

A missing ``GEMINI_API_KEY`` makes :func:`create_app` raise at import time,
so ``uvicorn meeting_notes.main:app`` refuses to start rather than failing on
the first request.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from meeting_notes import __version__
from meeting_notes.api import api_router
from meeting_notes.config import Settings, load_settings
from meeting_notes.errors import GENERIC_FAILURE_MESSAGE, SummarizerError
from meeting_notes.logging_config import setup_logging
from meeting_notes.services.handler import SummaryRequestHandler
from meeting_notes.services.llm import GeminiSummarizationClient, SummarizationClient

# ---------------------------------------------------------------------------
# Logging must be configured as soon as possible so that any errors during
# import/start-up are captured.
# ---------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(
    settings: Settings | None = None,
    summarizer: SummarizationClient | None = None,
) -> FastAPI:  # noqa: D401 – factory nomenclature is fine
    """Wire and return the FastAPI application instance."""

    settings = settings or load_settings()
    summarizer = summarizer or GeminiSummarizationClient(settings)

    app = FastAPI(
        title="Meeting Notes Summarizer API",
        version=__version__,
        docs_url="/api/docs",
    )
    app.state.settings = settings
    app.state.handler = SummaryRequestHandler(settings, summarizer)

    logger.info(
        "Summarizer configured: model=%s timeout=%ss retries=%d upload_limit=%dMB",
        settings.gemini_model,
        settings.gemini_timeout_seconds,
        settings.gemini_max_retries,
        settings.max_upload_size_mb,
    )

    # ------------------------------------------------------------------
    # Exception handlers
    # ------------------------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(  # noqa: D401
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        logger.error("Request validation error: %s", exc.errors())
        return JSONResponse(status_code=422, content={"detail": exc.errors()})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(  # noqa: D401
        _request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        logger.error("HTTP exception %s: %s", exc.status_code, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(SummarizerError)
    async def _summarizer_error_handler(  # noqa: D401
        _request: Request,
        exc: SummarizerError,
    ) -> JSONResponse:
        logger.error("Summarizer error %s: %s", exc.kind.value, exc.detail)
        return JSONResponse(status_code=exc.kind.http_status, content={"error": exc.public_message})

    @app.exception_handler(Exception)
    async def _generic_error_handler(  # noqa: D401
        _request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE_MESSAGE})

    # ------------------------------------------------------------------
    # Middleware
    # ------------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------------
    # Routers
    # ------------------------------------------------------------------

    app.include_router(api_router, prefix="/api")

    @app.get("/api/health")
    async def _health() -> dict[str, str]:  # noqa: D401
        return {"status": "ok"}

    return app


# Instantiate at import time so `uvicorn meeting_notes.main:app` works.
app: FastAPI = create_app()
