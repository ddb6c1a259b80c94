import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from extractor.app.api.correlation import get_correlation_id
from extractor.app.schemas.extraction import (
    ErrorResponse,
    ExtractionResponse,
    HealthResponse,
)
from extractor.app.services.pipeline import preview, run_extraction

logger = logging.getLogger("extractor.api")

router = APIRouter(tags=["Extraction"])

URL_REQUIRED = "URL is required"
EXTRACTION_FAILED = "Failed to extract text from PDF"
REQUEST_FAILED = "Failed to process request"

# =============================================================================
# Dependency providers
# =============================================================================

def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client created by the application lifespan."""
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        raise RuntimeError("http client not initialized")
    return client


def _error(status_code: int, payload: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(exclude_none=True),
    )


# =============================================================================
# GET /
# =============================================================================

@router.get(
    "/",
    response_model=HealthResponse,
    summary="Health and service info",
)
async def service_info() -> HealthResponse:
    return HealthResponse()


# =============================================================================
# POST /api/v1/extract
# =============================================================================

@router.post(
    "/api/v1/extract",
    summary="Extract a text excerpt from a remote PDF",
    response_model=ExtractionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing url"},
        500: {"model": ErrorResponse, "description": "Extraction or request failure"},
    },
)
async def extract(
    request: Request,
    correlation_id: Annotated[str, Depends(get_correlation_id)],
) -> JSONResponse:
    """
    Download the PDF at ``url`` and return up to 1000 characters of its text.

    Request body: ``{"url": "<string>"}``.

    Every pipeline failure (unreachable URL, upstream error status, not a
    PDF, unparsable page) is reported with the same generic 500 message.
    Only unexpected handler failures, such as a malformed JSON body,
    surface their message in ``details``.
    """
    try:
        body = await request.json()
        url = body.get("url") if isinstance(body, dict) else None

        if not url:
            logger.warning(
                "missing_url",
                extra={"trace_id": correlation_id},
            )
            return _error(
                status.HTTP_400_BAD_REQUEST,
                ErrorResponse(error=URL_REQUIRED),
            )

        url = str(url)
        logger.info(
            "Processing PDF from: %s",
            url,
            extra={"trace_id": correlation_id},
        )

        outcome = await run_extraction(get_http_client(request), url)

        if not outcome.ok:
            failure = outcome.failure
            logger.error(
                "extraction_pipeline_failure",
                extra={
                    "trace_id": correlation_id,
                    "failure_kind": failure.kind if failure else None,
                    "upstream_status": failure.status_code if failure else None,
                },
            )
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(error=EXTRACTION_FAILED),
            )

        text = outcome.text
        payload = ExtractionResponse(
            success=True,
            text=text,
            textLength=len(text),
            firstChars=preview(text),
        )
        return JSONResponse(content=payload.model_dump(by_alias=True))

    except Exception as exc:
        logger.exception(
            "request_processing_failure",
            extra={
                "trace_id": correlation_id,
                "error_type": type(exc).__name__,
            },
        )
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error=REQUEST_FAILED, details=str(exc)),
        )
