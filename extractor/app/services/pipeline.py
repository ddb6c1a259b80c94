"""
Extraction pipeline orchestration.

fetch -> validate -> parse/extract -> truncate

All stage failures are caught here and returned as a tagged
``ExtractionOutcome`` rather than raised. The outcome keeps the failure
kind and message so the caller can log it precisely while still
presenting a single generic error to clients.
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from extractor.app.services.errors import PipelineError
from extractor.app.services.fetcher import fetch_document
from extractor.app.services.text_extraction import extract_text
from extractor.app.services.validator import validate_pdf

logger = logging.getLogger("extractor.pipeline")

MAX_TEXT_CHARS = 1000
PREVIEW_CHARS = 100
PREVIEW_SUFFIX = "..."

FailureKind = Literal["fetch_error", "invalid_format", "extraction_error"]


# ----------------------------------------------------------------------
# Outcome types
# ----------------------------------------------------------------------

class PipelineFailure(BaseModel):
    """Why a pipeline run produced no text."""

    kind: FailureKind = Field(
        ...,
        description="Stage that failed",
    )

    message: str = Field(
        ...,
        description="Underlying error message (diagnostic only)",
    )

    status_code: Optional[int] = Field(
        None,
        description="Upstream HTTP status, for fetch failures only",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_error(cls, exc: PipelineError) -> "PipelineFailure":
        return cls(
            kind=exc.kind,
            message=str(exc),
            status_code=getattr(exc, "status_code", None),
        )


class ExtractionOutcome(BaseModel):
    """Result of one pipeline run: either text or a failure, never both."""

    text: Optional[str] = None
    failure: Optional[PipelineFailure] = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.text is not None


# ----------------------------------------------------------------------
# Aggregation helpers
# ----------------------------------------------------------------------

def truncate_text(text: str) -> str:
    """Clip to at most ``MAX_TEXT_CHARS`` characters. No ellipsis."""
    return text[:MAX_TEXT_CHARS]


def preview(text: str) -> str:
    """First ``PREVIEW_CHARS`` characters followed by ``...``, always."""
    return text[:PREVIEW_CHARS] + PREVIEW_SUFFIX


# ----------------------------------------------------------------------
# Orchestration
# ----------------------------------------------------------------------

async def run_extraction(client: httpx.AsyncClient, url: str) -> ExtractionOutcome:
    """
    Run the full pipeline for ``url``.

    Pipeline errors never escape; anything else is a programming error
    and propagates to the request handler.
    """
    try:
        document = await fetch_document(client, url)
        await validate_pdf(document.content)
        full_text = await extract_text(document.content)
    except PipelineError as exc:
        logger.error(
            "PDF extraction failed: %s",
            exc,
            extra={"url": url, "failure_kind": exc.kind},
        )
        return ExtractionOutcome(failure=PipelineFailure.from_error(exc))

    logger.info("Extracted text: %s", preview(full_text))

    return ExtractionOutcome(text=truncate_text(full_text))
