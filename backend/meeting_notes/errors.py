"""Error taxonomy for the transcript-to-summary pipeline.

Every failure the pipeline can produce is a :class:`SummarizerError` tagged
with an :class:`ErrorKind`.  The kind decides the HTTP status and the public
message; ``detail`` is for server-side logs only and is never sent to the
client.
"""

from __future__ import annotations

from enum import Enum

GENERIC_FAILURE_MESSAGE = "Failed to generate summary."


class ErrorKind(str, Enum):
    """Closed set of failure reasons."""

    NO_INPUT_PROVIDED = "NoInputProvided"
    UNSUPPORTED_FILE_TYPE = "UnsupportedFileType"
    EXTRACTION_FAILED = "ExtractionFailed"
    EMPTY_INPUT = "EmptyInput"
    PAYLOAD_TOO_LARGE = "PayloadTooLarge"
    MALFORMED_RESPONSE = "MalformedResponse"
    UPSTREAM_UNAVAILABLE = "UpstreamUnavailable"
    INTERNAL_ERROR = "InternalError"

    @property
    def is_client_error(self) -> bool:
        return self in _CLIENT_ERRORS

    @property
    def http_status(self) -> int:
        if self is ErrorKind.PAYLOAD_TOO_LARGE:
            return 413
        return 400 if self.is_client_error else 500


_CLIENT_ERRORS = frozenset(
    {
        ErrorKind.NO_INPUT_PROVIDED,
        ErrorKind.UNSUPPORTED_FILE_TYPE,
        ErrorKind.EXTRACTION_FAILED,
        ErrorKind.EMPTY_INPUT,
        ErrorKind.PAYLOAD_TOO_LARGE,
    }
)

_PUBLIC_MESSAGES = {
    ErrorKind.NO_INPUT_PROVIDED: "No transcript text or file uploaded.",
    ErrorKind.UNSUPPORTED_FILE_TYPE: "Unsupported file type. Only .txt and .pdf allowed.",
    ErrorKind.EXTRACTION_FAILED: "Could not extract text from the uploaded file.",
    ErrorKind.EMPTY_INPUT: "Empty transcript content.",
}


class SummarizerError(Exception):
    """Domain-level base exception so we can map to JSON responses easily."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, detail: str | None = None, status_code: int | None = None) -> None:
        self.detail = detail or self.kind.value
        # Upstream HTTP status, when the failure came from the completion API.
        self.status_code = status_code
        super().__init__(self.detail)

    @property
    def public_message(self) -> str:
        return _PUBLIC_MESSAGES.get(self.kind, GENERIC_FAILURE_MESSAGE)


class NoInputProvided(SummarizerError):
    kind = ErrorKind.NO_INPUT_PROVIDED


class UnsupportedFileType(SummarizerError):
    kind = ErrorKind.UNSUPPORTED_FILE_TYPE


class ExtractionFailed(SummarizerError):
    kind = ErrorKind.EXTRACTION_FAILED


class EmptyInput(SummarizerError):
    kind = ErrorKind.EMPTY_INPUT


class PayloadTooLarge(SummarizerError):
    """Raised when an upload or JSON body exceeds the configured size limit."""

    kind = ErrorKind.PAYLOAD_TOO_LARGE

    def __init__(self, limit_mb: int) -> None:
        self.limit_mb = limit_mb
        super().__init__(f"Upload exceeded {limit_mb} MB")

    @property
    def public_message(self) -> str:
        return f"Transcript exceeds the maximum allowed size of {self.limit_mb} MB."


class MalformedResponse(SummarizerError):
    kind = ErrorKind.MALFORMED_RESPONSE


class UpstreamUnavailable(SummarizerError):
    kind = ErrorKind.UPSTREAM_UNAVAILABLE


class InternalError(SummarizerError):
    kind = ErrorKind.INTERNAL_ERROR
