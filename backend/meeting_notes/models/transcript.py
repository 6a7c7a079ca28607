"""Transient value objects that flow through one summarize request.

None of these outlive the request that created them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from meeting_notes.errors import ErrorKind


@dataclass(frozen=True)
class TextInput:
    """Transcript pasted as text."""

    content: str

    kind = "text"


@dataclass(frozen=True)
class FileInput:
    """Transcript uploaded as a document."""

    data: bytes = field(repr=False)
    declared_name: str = ""
    declared_mime_type: str = ""

    kind = "file"


TranscriptInput = Union[TextInput, FileInput]


@dataclass(frozen=True)
class ExtractedTranscript:
    """Plain-text transcript ready for prompting. Never blank."""

    text: str


@dataclass(frozen=True)
class SummaryResult:
    """Markdown returned by the completion capability, untouched."""

    markdown: str


@dataclass(frozen=True)
class ErrorResult:
    kind: ErrorKind
    message: str

    @property
    def http_status(self) -> int:
        return self.kind.http_status
