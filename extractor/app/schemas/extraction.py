"""
Public response payloads of the extraction API.

Field aliases carry the camelCase wire names; serialize with
``model_dump(by_alias=True, exclude_none=True)``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "PDF Extraction Service"

    model_config = ConfigDict(frozen=True)


class ExtractionResponse(BaseModel):
    """Successful extraction. ``text`` is already truncated."""

    success: bool = True

    text: str = Field(
        ...,
        description="Extracted text, at most 1000 characters",
    )

    text_length: int = Field(
        ...,
        alias="textLength",
        ge=0,
        description="Length of the returned (truncated) text",
    )

    first_chars: str = Field(
        ...,
        alias="firstChars",
        description="First 100 characters of text followed by '...'",
    )

    model_config = ConfigDict(frozen=True)


class ErrorResponse(BaseModel):
    error: str = Field(
        ...,
        description="Stable, client-facing error message",
    )

    details: Optional[str] = Field(
        None,
        description="Underlying exception message, handler-level failures only",
    )

    model_config = ConfigDict(frozen=True)
