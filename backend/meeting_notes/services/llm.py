"""Abstraction layer around the Gemini ``generateContent`` REST API.

Public API:

    client = GeminiSummarizationClient(settings)
    result = await client.summarize(prompt)   # -> SummaryResult

Failures surface as :class:`~meeting_notes.errors.UpstreamUnavailable` or
:class:`~meeting_notes.errors.MalformedResponse`.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from meeting_notes.config import Settings
from meeting_notes.errors import MalformedResponse, UpstreamUnavailable
from meeting_notes.models.transcript import SummaryResult

logger = logging.getLogger(__name__)

# Gateway-style failures worth another attempt. 4xx never is.
RETRYABLE_STATUS_CODES = frozenset({502, 503, 504})


class SummarizationClient(ABC):
    """Given a prompt string, return a text completion."""

    @abstractmethod
    async def summarize(self, prompt: str) -> SummaryResult:
        """
        Raises:
            UpstreamUnavailable: Network failure, timeout or non-2xx status.
            MalformedResponse: The completion text could not be located.
        """


def extract_completion_text(payload: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` from a Gemini response.

    Raises:
        MalformedResponse: If any step of that path is missing or the text is
            not a string.
    """
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponse(f"Completion text missing from response: {exc!r}") from exc
    if not isinstance(text, str):
        raise MalformedResponse(f"Completion text is {type(text).__name__}, expected str")
    return text


class GeminiSummarizationClient(SummarizationClient):
    """Calls Gemini once per prompt, with a bounded timeout and limited retries."""

    def __init__(self, settings: Settings) -> None:
        self._url = settings.generate_content_url
        self._api_key = settings.gemini_api_key
        self._timeout = settings.gemini_timeout_seconds
        self._max_retries = max(settings.gemini_max_retries, 0)
        self._backoff = settings.gemini_retry_backoff_seconds

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                }
            ]
        }

    async def summarize(self, prompt: str) -> SummaryResult:
        attempts = self._max_retries + 1
        last_error: UpstreamUnavailable | None = None

        for attempt in range(1, attempts + 1):
            try:
                payload = await self._post(prompt)
            except UpstreamUnavailable as exc:
                last_error = exc
                retryable = exc.status_code is None or exc.status_code in RETRYABLE_STATUS_CODES
                if not retryable or attempt == attempts:
                    raise
                delay = self._backoff * attempt
                logger.warning(
                    "Gemini attempt %d/%d failed (%s); retrying in %.2fs",
                    attempt,
                    attempts,
                    exc.detail,
                    delay,
                )
                await asyncio.sleep(delay)
                continue

            text = extract_completion_text(payload)
            logger.info("Gemini returned %d characters on attempt %d", len(text), attempt)
            return SummaryResult(markdown=text)

        # Unreachable: the last attempt either returns or raises.
        raise last_error or UpstreamUnavailable("No attempt was made")

    async def _post(self, prompt: str) -> Any:
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=self._build_payload(prompt), headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            body = exc.response.text
            logger.error("Gemini returned HTTP %s: %s", status_code, body[:500])
            raise UpstreamUnavailable(f"HTTP {status_code}: {body[:500]}", status_code=status_code) from exc
        except httpx.TimeoutException as exc:
            logger.error("Gemini request timed out after %ss", self._timeout)
            raise UpstreamUnavailable(f"Timed out after {self._timeout}s") from exc
        except httpx.RequestError as exc:
            logger.error("Could not reach Gemini: %s", exc)
            raise UpstreamUnavailable(f"Request error: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response body is not JSON: {exc}") from exc
