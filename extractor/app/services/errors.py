"""
Failure taxonomy for the extraction pipeline.

Every stage raises a subclass of ``PipelineError``. The ``kind`` tag
travels with the failure up to the request handler, which logs it and
decides how much to expose to the caller.
"""

from __future__ import annotations

from typing import ClassVar, Optional


class PipelineError(RuntimeError):
    """Base class for failures raised inside the extraction pipeline."""

    kind: ClassVar[str] = "pipeline_error"


class FetchError(PipelineError):
    """Raised when the remote document cannot be retrieved."""

    kind: ClassVar[str] = "fetch_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class InvalidFormatError(PipelineError):
    """Raised when the fetched bytes are not a structurally valid PDF."""

    kind: ClassVar[str] = "invalid_format"


class ExtractionError(PipelineError):
    """Raised when full parsing or per-page text extraction fails."""

    kind: ClassVar[str] = "extraction_error"

    def __init__(
        self,
        message: str,
        *,
        page_number: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.page_number = page_number
