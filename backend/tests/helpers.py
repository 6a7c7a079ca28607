"""Test doubles and payload builders shared across test modules."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx

from meeting_notes.models.transcript import SummaryResult
from meeting_notes.services.llm import SummarizationClient


class StubSummarizer(SummarizationClient):
    """Records prompts and returns a canned completion (or raises)."""

    def __init__(self, markdown: str = "## Summary\n...", error: Exception | None = None) -> None:
        self.markdown = markdown
        self.error = error
        self.prompts: list[str] = []

    async def summarize(self, prompt: str) -> SummaryResult:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return SummaryResult(markdown=self.markdown)


def make_pdf(text: str) -> bytes:
    """Build a one-page PDF that draws ``text`` in Helvetica."""
    stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset)
    return bytes(out)


def gemini_response(payload: dict) -> MagicMock:
    """A successful httpx response whose ``.json()`` returns ``payload``."""
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


def gemini_error_response(status_code: int, text: str) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.raise_for_status = MagicMock(
        side_effect=httpx.HTTPStatusError(
            f"Server error '{status_code}'",
            request=MagicMock(),
            response=MagicMock(status_code=status_code, text=text),
        )
    )
    return response


def completion(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}

