"""
Per-page visible text extraction.

Text is collected from each page's content stream through pypdf's
``visitor_text`` hook, which reports every text run the parser emits.
Positional and font metadata are discarded; only the string payload is
kept. No OCR, no layout reconstruction, no hyphenation or column
handling: fragments are joined in the order the parser emits them.

Pages are processed strictly in order, one at a time. A failure on any
page aborts the whole extraction; partial text is never returned.
"""

from __future__ import annotations

import io
import logging
from typing import Any, List, Tuple

import anyio
from pypdf import PdfReader

from extractor.app.services.errors import ExtractionError

logger = logging.getLogger("extractor.text_extraction")

FRAGMENT_SEPARATOR = " "
PAGE_TERMINATOR = "\n"


def _load_pages(content: bytes) -> Tuple[PdfReader, int]:
    reader = PdfReader(io.BytesIO(content))
    return reader, len(reader.pages)


def _page_fragments(reader: PdfReader, page_number: int) -> List[str]:
    """
    Return the text fragments of a 1-indexed page, in emission order.

    Runs that carry no text (empty strings, bare line breaks inserted by
    the parser between positioned runs) are markers, not fragments.
    """
    page = reader.pages[page_number - 1]
    fragments: List[str] = []

    def collect(text: str, *_metadata: Any) -> None:
        payload = text.strip("\r\n")
        if payload:
            fragments.append(payload)

    page.extract_text(visitor_text=collect)
    return fragments


async def extract_text(content: bytes) -> str:
    """
    Parse a validated PDF and return the concatenated text of all pages.

    Each page contributes its fragments joined by single spaces followed
    by a newline. A document with no extractable text yields ``""`` and a
    warning; that is not an error.

    Raises:
        ExtractionError:
            If the document cannot be parsed or any page fails.
    """
    try:
        reader, page_count = await anyio.to_thread.run_sync(_load_pages, content)
    except Exception as exc:
        raise ExtractionError(f"Failed to parse PDF: {exc}") from exc

    logger.info("PDF loaded, pages: %d", page_count)

    page_texts: List[str] = []
    for page_number in range(1, page_count + 1):
        logger.info("Processing page %d of %d", page_number, page_count)
        try:
            fragments = await anyio.to_thread.run_sync(
                _page_fragments, reader, page_number
            )
        except Exception as exc:
            raise ExtractionError(
                f"Failed to extract text from page {page_number}: {exc}",
                page_number=page_number,
            ) from exc

        page_texts.append(FRAGMENT_SEPARATOR.join(fragments) + PAGE_TERMINATOR)

    full_text = "".join(page_texts)
    logger.info("Text extraction complete, length: %d", len(full_text))

    if not full_text.strip():
        logger.warning(
            "extracted_text_empty",
            extra={"page_count": page_count},
        )
        return ""

    return full_text
