"""
Remote document retrieval.

A single GET per request through the shared ``httpx.AsyncClient``.
No retries. The effective timeout is whatever the client was built with.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ConfigDict

from extractor.app.services.errors import FetchError

logger = logging.getLogger("extractor.fetcher")


class FetchedDocument(BaseModel):
    """Raw bytes of a downloaded document, owned by a single request."""

    url: str
    content: bytes
    size: int

    model_config = ConfigDict(frozen=True)


async def fetch_document(client: httpx.AsyncClient, url: str) -> FetchedDocument:
    """
    Download ``url`` and return its full body.

    Raises:
        FetchError:
            On a non-success HTTP status (status code and reason attached)
            or on any transport or client failure (DNS, refused connection,
            timeout, malformed URL, unusable response metadata).
    """
    logger.info("Fetching PDF from URL: %s", url)

    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code
        reason = exc.response.reason_phrase
        raise FetchError(
            f"Failed to fetch PDF: {status_code} {reason}",
            status_code=status_code,
            reason=reason,
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL, httpx.CookieConflict, ValueError) as exc:
        detail = str(exc) or type(exc).__name__
        raise FetchError(f"Failed to fetch PDF: {detail}") from exc

    content = response.content
    logger.info(
        "PDF fetched, size: %d",
        len(content),
        extra={"url": url, "size": len(content)},
    )

    return FetchedDocument(url=url, content=content, size=len(content))
