"""Transcript summarization endpoint.

``POST /api/summarize`` accepts either

* ``multipart/form-data`` with a ``file`` part (``.txt`` / ``.pdf``), or
* a JSON body ``{"content": "<transcript text>"}``.

If both a file and ``content`` are sent, the file wins.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from meeting_notes.config import Settings
from meeting_notes.errors import SummarizerError
from meeting_notes.models.api import ErrorResponse, SummaryResponse
from meeting_notes.models.transcript import ErrorResult, TranscriptInput
from meeting_notes.services.handler import SummaryRequestHandler, select_input
from meeting_notes.utils.disconnect import ClientDisconnected, run_until_disconnected
from meeting_notes.utils.uploads import read_body, read_upload

router = APIRouter()
logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

# nginx's non-standard "client closed request" status.
CLIENT_CLOSED_REQUEST = 499


async def read_transcript_input(request: Request, settings: Settings) -> TranscriptInput:
    """Pull the file part or ``content`` field out of the request body.

    Raises:
        NoInputProvided: Nothing usable in the body.
        PayloadTooLarge: The uploaded file or JSON body exceeds the configured limit.
    """
    content_type = request.headers.get("content-type", "").lower()
    file_data: bytes | None = None
    file_name: str | None = None
    file_mime_type: str | None = None
    content = None

    if content_type.startswith(FORM_CONTENT_TYPES):
        async with request.form() as form:
            upload = form.get("file")
            if isinstance(upload, UploadFile):
                file_name = upload.filename
                file_mime_type = upload.content_type
                file_data = await read_upload(upload, settings.max_upload_size_bytes, settings.max_upload_size_mb)
            content = form.get("content")
    elif content_type.startswith("application/json"):
        raw = await read_body(request, settings.max_upload_size_bytes, settings.max_upload_size_mb)
        try:
            body = json.loads(raw) if raw else None
        except ValueError:
            logger.warning("Ignoring unparseable JSON body")
            body = None
        if isinstance(body, dict):
            content = body.get("content")

    return select_input(file_data, file_name, file_mime_type, content if isinstance(content, str) else None)


@router.post(
    "/summarize",
    response_model=SummaryResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def summarize(request: Request) -> Response:
    """Summarize a meeting transcript into Markdown."""
    settings: Settings = request.app.state.settings
    handler: SummaryRequestHandler = request.app.state.handler

    try:
        transcript_input = await read_transcript_input(request, settings)
    except SummarizerError as exc:
        logger.warning("Rejected summarize request: kind=%s detail=%s", exc.kind.value, exc.detail)
        return JSONResponse(status_code=exc.kind.http_status, content={"error": exc.public_message})

    try:
        result = await run_until_disconnected(request, handler.handle(transcript_input))
    except ClientDisconnected:
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    if isinstance(result, ErrorResult):
        return JSONResponse(status_code=result.http_status, content={"error": result.message})
    return JSONResponse(status_code=status.HTTP_200_OK, content={"summary": result.markdown})
