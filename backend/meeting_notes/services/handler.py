"""Orchestrates one summarize request: extract -> build prompt -> summarize."""

from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool

from meeting_notes.config import Settings
from meeting_notes.errors import (
    GENERIC_FAILURE_MESSAGE,
    ErrorKind,
    NoInputProvided,
    PayloadTooLarge,
    SummarizerError,
)
from meeting_notes.models.transcript import (
    ErrorResult,
    FileInput,
    SummaryResult,
    TextInput,
    TranscriptInput,
)
from meeting_notes.services.extraction import extract
from meeting_notes.services.llm import SummarizationClient
from meeting_notes.services.prompts import build_prompt

logger = logging.getLogger(__name__)


def select_input(
    file_data: bytes | None,
    file_name: str | None,
    file_mime_type: str | None,
    content: str | None,
) -> TranscriptInput:
    """Pick exactly one input from what the request carried.

    An uploaded file takes precedence over ``content``; an empty ``content``
    string counts as absent.

    Raises:
        NoInputProvided: Neither a file nor non-empty content is present.
    """
    if file_data is not None:
        return FileInput(
            data=file_data,
            declared_name=file_name or "",
            declared_mime_type=file_mime_type or "",
        )
    if isinstance(content, str) and content:
        return TextInput(content=content)
    raise NoInputProvided("Request carried neither a file nor content")


class SummaryRequestHandler:
    """Runs the pipeline for a single request. Holds no per-request state."""

    def __init__(self, settings: Settings, client: SummarizationClient) -> None:
        self._settings = settings
        self._client = client

    async def handle(self, transcript_input: TranscriptInput | None) -> SummaryResult | ErrorResult:
        """Return the summary, or an :class:`ErrorResult` safe to show the caller."""
        if not isinstance(transcript_input, (TextInput, FileInput)):
            return self._client_error(NoInputProvided("No transcript input"))

        if isinstance(transcript_input, FileInput):
            logger.info("Received %s transcript input (%d bytes)", transcript_input.kind, len(transcript_input.data))
        else:
            logger.info(
                "Received %s transcript input (%d characters)", transcript_input.kind, len(transcript_input.content)
            )

        limit = self._settings.max_upload_size_bytes
        if isinstance(transcript_input, FileInput) and limit and len(transcript_input.data) > limit:
            return self._client_error(PayloadTooLarge(self._settings.max_upload_size_mb))

        # Extraction runs in a worker thread; PDF parsing is CPU-bound.
        try:
            extracted = await run_in_threadpool(extract, transcript_input)
        except SummarizerError as exc:
            return self._client_error(exc)

        prompt = build_prompt(extracted.text)
        logger.info("Prompt built (%d transcript characters)", len(extracted.text))

        try:
            result = await self._client.summarize(prompt)
        except SummarizerError as exc:
            logger.error(
                "Summarization failed: kind=%s upstream_status=%s detail=%s",
                exc.kind.value,
                exc.status_code,
                exc.detail,
            )
            return ErrorResult(kind=ErrorKind.INTERNAL_ERROR, message=GENERIC_FAILURE_MESSAGE)

        logger.info("Summary generated (%d characters)", len(result.markdown))
        return result

    def _client_error(self, exc: SummarizerError) -> ErrorResult:
        logger.warning("Rejected transcript input: kind=%s detail=%s", exc.kind.value, exc.detail)
        return ErrorResult(kind=exc.kind, message=exc.public_message)
