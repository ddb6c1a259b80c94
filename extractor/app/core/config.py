"""
Centralized configuration for the PDF extraction service.

Pydantic v2 settings management. Everything is read from the process
environment (and an optional ``.env`` file) once at startup and is
immutable afterwards.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Annotated, Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PORT = 3001

# Mirrors parseInt: an optional sign followed by leading digits, rest ignored.
_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


# -------------------------------------------------------------------------
# Settings Model
# -------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Application settings parsed from the environment.

    A missing or malformed ``PORT`` never prevents startup; it falls back
    to the default listening port instead.
    """

    # ---------------------------------------------------------------------
    # Listener
    # ---------------------------------------------------------------------

    port: Annotated[
        int,
        Field(
            default=DEFAULT_PORT,
            description="TCP port the HTTP server listens on",
        ),
    ]

    host: Annotated[
        str,
        Field(
            default="0.0.0.0",
            description="Bind address for the HTTP server",
        ),
    ]

    # ---------------------------------------------------------------------
    # Observability
    # ---------------------------------------------------------------------

    log_level: Annotated[
        str,
        Field(
            default="INFO",
            description="Root logging level",
        ),
    ]

    # ---------------------------------------------------------------------
    # Outbound document fetching
    # ---------------------------------------------------------------------

    fetch_timeout_seconds: Annotated[
        Optional[float],
        Field(
            default=None,
            gt=0,
            description=(
                "Timeout applied to document downloads. "
                "Unset keeps the HTTP client's default timeout."
            ),
        ),
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    @field_validator("port", mode="before")
    @classmethod
    def _parse_port(cls, value: Any) -> int:
        if value is None:
            return DEFAULT_PORT
        if isinstance(value, int) and not isinstance(value, bool):
            candidate = value
        else:
            match = _LEADING_INTEGER.match(str(value))
            if not match:
                return DEFAULT_PORT
            candidate = int(match.group(1))

        if not 0 < candidate < 65536:
            return DEFAULT_PORT
        return candidate

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        return str(value).strip().upper() or "INFO"


# -------------------------------------------------------------------------
# Settings Dependency Provider
# -------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings singleton."""
    return Settings()
