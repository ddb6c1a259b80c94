"""
FastAPI entrypoint for the PDF extraction service.

Accepts a document URL, downloads the PDF, extracts its visible text and
returns a bounded excerpt as JSON. The service is stateless: nothing is
cached or persisted between requests, and the only process-wide object
is the pooled outbound HTTP client.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Dict, Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from extractor.app.api.correlation import (
    CORRELATION_HEADER,
    resolve_correlation_id,
)
from extractor.app.api.routes import router as extract_router
from extractor.app.core.config import Settings, get_settings
from extractor.app.core.logging_config import configure_logging

logger = logging.getLogger("extractor.main")


def get_app_version() -> str:
    """Installed distribution version, or the source-tree default."""
    try:
        return version("pdf-extraction-service")
    except PackageNotFoundError:
        return "0.1.0"


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Outbound client used to download documents.

    Redirects are followed so only the final status decides success.
    """
    options: Dict[str, Any] = {
        "follow_redirects": True,
        "headers": {"User-Agent": f"pdf-extraction-service/{get_app_version()}"},
    }
    if settings.fetch_timeout_seconds is not None:
        options["timeout"] = httpx.Timeout(settings.fetch_timeout_seconds)
    return httpx.AsyncClient(**options)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Owns the shared HTTP client: created on startup, closed on shutdown.
    """
    settings: Settings = app.state.settings

    logger.info(
        "extraction_service_startup",
        extra={
            "service": "extractor",
            "version": get_app_version(),
            "port": settings.port,
        },
    )

    app.state.http_client = build_http_client(settings)

    try:
        yield
    finally:
        logger.info("extraction_service_shutdown")
        try:
            await app.state.http_client.aclose()
        except Exception:
            logger.warning("http_client_shutdown_failed")


async def log_requests(request: Request, call_next):
    """Request/response access log with a per-request correlation ID."""
    correlation_id = resolve_correlation_id(
        request.headers.get(CORRELATION_HEADER)
    )
    request.state.correlation_id = correlation_id

    logger.info(
        "<-- %s %s",
        request.method,
        request.url.path,
        extra={"trace_id": correlation_id},
    )
    started = time.perf_counter()

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "--> %s %s %d %.0fms",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
            extra={"trace_id": correlation_id},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory for the extraction service.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="PDF Extraction Service",
        description="Fetches a remote PDF and returns an excerpt of its text.",
        version=get_app_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Registered before the access log so that logging wraps CORS and
    # sees preflight requests too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=[CORRELATION_HEADER],
        max_age=86400,
    )
    app.middleware("http")(log_requests)

    app.include_router(extract_router)
    return app


app = create_app()


def run() -> None:
    """Console entrypoint: serve ``app`` with uvicorn."""
    settings: Settings = app.state.settings
    logger.info("Starting PDF extraction server on port %d", settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
