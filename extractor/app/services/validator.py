"""
Lightweight PDF structure gate.

Opens the buffer with pikepdf (xref and trailer only, no content stream
interpretation) so that corrupt or non-PDF payloads are rejected before
the more expensive full parse.
"""

from __future__ import annotations

import io
import logging

import anyio
import pikepdf

from extractor.app.services.errors import InvalidFormatError

logger = logging.getLogger("extractor.validator")


def _open_structure(content: bytes) -> None:
    with pikepdf.open(io.BytesIO(content)):
        pass


async def validate_pdf(content: bytes) -> None:
    """
    Raise ``InvalidFormatError`` unless ``content`` loads as a PDF.

    Success is silent.
    """
    try:
        await anyio.to_thread.run_sync(_open_structure, content)
    except Exception as exc:
        logger.warning(
            "pdf_structure_rejected",
            extra={
                "size": len(content),
                "error_type": type(exc).__name__,
            },
        )
        raise InvalidFormatError("Invalid PDF format") from exc
