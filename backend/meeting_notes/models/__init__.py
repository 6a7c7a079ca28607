# Namespace for request/response value objects.
from .api import ErrorResponse, SummaryResponse
from .transcript import (
    ErrorResult,
    ExtractedTranscript,
    FileInput,
    SummaryResult,
    TextInput,
    TranscriptInput,
)

__all__ = [
    "ErrorResponse",
    "ErrorResult",
    "ExtractedTranscript",
    "FileInput",
    "SummaryResponse",
    "SummaryResult",
    "TextInput",
    "TranscriptInput",
]
