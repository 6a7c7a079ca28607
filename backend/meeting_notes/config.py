"""Application-wide configuration loader.

This module
1. parses environment variables (``GEMINI_API_KEY``, ``PORT``, ...); and
2. provides :func:`load_settings` which returns an immutable :class:`Settings`
   object.  It is constructed exactly once at start-up and handed to the
   components that need it; nothing else reads the environment.
"""

from __future__ import annotations

import os

from pydantic import BaseModel


class ConfigurationError(RuntimeError):
    """Raised at start-up when a required setting is missing or invalid."""


class Settings(BaseModel, frozen=True):
    """Immutable process-wide settings.

    Rationale
    ---------
    When docker-compose injects an environment variable whose value is empty
    (e.g. ``PORT=""``) ``os.getenv("PORT", default)`` returns an empty string
    *not* ``None``.  :func:`load_settings` therefore uses the idiom

        os.getenv(KEY) or DEFAULT

    so that empty values are replaced by the specified DEFAULT.
    """

    gemini_api_key: str
    gemini_model: str = "gemini-1.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1"
    gemini_timeout_seconds: float = 30.0
    gemini_max_retries: int = 2
    gemini_retry_backoff_seconds: float = 0.5

    max_upload_size_mb: int = 10

    host: str = "0.0.0.0"
    port: int = 4000

    @property
    def max_upload_size_bytes(self) -> int:
        """Upload limit in bytes; ``0`` means unlimited."""
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def generate_content_url(self) -> str:
        base = self.gemini_api_base.rstrip("/")
        return f"{base}/models/{self.gemini_model}:generateContent"


def _int(key: str, default: str) -> int:
    raw = os.getenv(key) or default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


def _float(key: str, default: str) -> float:
    raw = os.getenv(key) or default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc


def load_settings() -> Settings:
    """Build :class:`Settings` from the environment.

    Raises:
        ConfigurationError: If ``GEMINI_API_KEY`` is not set or a numeric
            variable cannot be parsed.
    """
    api_key = (os.getenv("GEMINI_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY environment variable not set.")

    return Settings(
        gemini_api_key=api_key,
        gemini_model=os.getenv("GEMINI_MODEL") or "gemini-1.5-flash",
        gemini_api_base=os.getenv("GEMINI_API_BASE") or "https://generativelanguage.googleapis.com/v1",
        gemini_timeout_seconds=_float("GEMINI_TIMEOUT_SECONDS", "30"),
        gemini_max_retries=_int("GEMINI_MAX_RETRIES", "2"),
        gemini_retry_backoff_seconds=_float("GEMINI_RETRY_BACKOFF_SECONDS", "0.5"),
        max_upload_size_mb=_int("MAX_UPLOAD_SIZE_MB", "10"),
        host=os.getenv("HOST") or "0.0.0.0",
        port=_int("PORT", "4000"),
    )
