"""Turn a :class:`TranscriptInput` into plain transcript text.

Uploaded documents are classified once by :func:`classify_file` into a
:class:`FileKind`; :func:`extract` then dispatches on that kind.  Everything
here is a pure function of the input bytes and metadata, so it is safe to run
in a worker thread.
"""

from __future__ import annotations

import io
import logging
from enum import Enum
from pathlib import PurePath

from pypdf import PdfReader

from meeting_notes.errors import EmptyInput, ExtractionFailed, UnsupportedFileType
from meeting_notes.models.transcript import (
    ExtractedTranscript,
    FileInput,
    TextInput,
    TranscriptInput,
)

logger = logging.getLogger(__name__)


class FileKind(str, Enum):
    PDF = "pdf"
    PLAIN_TEXT = "plain_text"
    UNSUPPORTED = "unsupported"


MIME_TYPES = {
    "application/pdf": FileKind.PDF,
    "text/plain": FileKind.PLAIN_TEXT,
}

SUFFIXES = {
    ".pdf": FileKind.PDF,
    ".txt": FileKind.PLAIN_TEXT,
}


def classify_file(mime_type: str | None, filename: str | None) -> FileKind:
    """Decide how an upload should be read.

    The declared MIME type wins when it is present *and* recognised
    (parameters such as ``; charset=utf-8`` are ignored).  Otherwise the
    filename suffix is matched case-insensitively.
    """
    if mime_type:
        essence = mime_type.split(";", 1)[0].strip().lower()
        if essence in MIME_TYPES:
            return MIME_TYPES[essence]

    if filename:
        suffix = PurePath(filename).suffix.lower()
        if suffix in SUFFIXES:
            return SUFFIXES[suffix]

    return FileKind.UNSUPPORTED


def extract_pdf_text(data: bytes) -> str:
    """Return the concatenated text of every page in a PDF.

    Raises:
        ExtractionFailed: If the document cannot be parsed or yields no text.
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:  # pypdf raises a wide range of parser errors
        logger.warning("PDF parsing failed: %s", exc)
        raise ExtractionFailed(f"PDF parsing failed: {exc}") from exc

    if not any(pages):
        raise ExtractionFailed(f"PDF yielded no text ({len(pages)} pages)")
    return "\n".join(pages)


def decode_plain_text(data: bytes) -> str:
    # utf-8-sig drops a leading BOM; invalid sequences become U+FFFD
    return data.decode("utf-8-sig", errors="replace")


def extract(transcript_input: TranscriptInput) -> ExtractedTranscript:
    """Produce a non-blank :class:`ExtractedTranscript`.

    Raises:
        UnsupportedFileType: Upload is neither PDF nor plain text.
        ExtractionFailed: PDF could not be read.
        EmptyInput: The resulting text is blank after trimming.
    """
    if isinstance(transcript_input, TextInput):
        text = transcript_input.content
    elif isinstance(transcript_input, FileInput):
        text = _extract_file(transcript_input)
    else:
        raise TypeError(f"Unknown transcript input: {type(transcript_input).__name__}")

    if not text.strip():
        raise EmptyInput(f"{transcript_input.kind} input is blank")
    return ExtractedTranscript(text=text)


def _extract_file(upload: FileInput) -> str:
    file_kind = classify_file(upload.declared_mime_type, upload.declared_name)
    logger.info(
        "Classified upload '%s' (%s, %d bytes) as %s",
        upload.declared_name,
        upload.declared_mime_type or "no content type",
        len(upload.data),
        file_kind.value,
    )

    if file_kind is FileKind.PDF:
        return extract_pdf_text(upload.data)
    if file_kind is FileKind.PLAIN_TEXT:
        return decode_plain_text(upload.data)
    raise UnsupportedFileType(
        f"Unsupported upload '{upload.declared_name}' ({upload.declared_mime_type or 'no content type'})"
    )
