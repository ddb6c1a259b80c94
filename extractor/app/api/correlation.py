import uuid
from typing import Optional

from fastapi import Request

CORRELATION_HEADER = "X-Correlation-ID"
MAX_CORRELATION_ID_LENGTH = 128


def resolve_correlation_id(header_value: Optional[str]) -> str:
    """Reuse the caller's correlation ID when sane, else mint a new one."""
    if header_value and len(header_value) <= MAX_CORRELATION_ID_LENGTH:
        return header_value
    return str(uuid.uuid4())


def get_correlation_id(request: Request) -> str:
    """Correlation ID bound to the request by the logging middleware."""
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id is None:
        correlation_id = resolve_correlation_id(
            request.headers.get(CORRELATION_HEADER)
        )
        request.state.correlation_id = correlation_id
    return correlation_id
