"""Helpers for reading uploaded transcript files and request bodies into memory."""

import logging

from starlette.datastructures import UploadFile
from starlette.requests import Request

from meeting_notes.errors import PayloadTooLarge

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


async def read_upload(file: UploadFile, max_bytes: int, limit_mb: int) -> bytes:
    """Read an upload fully, refusing anything larger than ``max_bytes``.

    ``max_bytes == 0`` disables the limit.

    Raises:
        PayloadTooLarge: The upload is bigger than the configured limit.
    """
    chunks: list[bytes] = []
    bytes_read = 0
    while True:
        chunk = await file.read(CHUNK_SIZE)  # Read file in 8KB chunks
        if not chunk:
            break
        bytes_read += len(chunk)
        if max_bytes and bytes_read > max_bytes:
            logger.warning(
                "File upload exceeded max size. file=%s limit=%dMB",
                file.filename,
                limit_mb,
            )
            raise PayloadTooLarge(limit_mb)
        chunks.append(chunk)

    logger.info("Read upload '%s' (%s, %d bytes)", file.filename, file.content_type, bytes_read)
    return b"".join(chunks)


async def read_body(request: Request, max_bytes: int, limit_mb: int) -> bytes:
    """Stream a raw request body, stopping as soon as it passes ``max_bytes``.

    Raises:
        PayloadTooLarge: The body is bigger than the configured limit.
    """
    declared = request.headers.get("content-length")
    if max_bytes and declared and declared.isdigit() and int(declared) > max_bytes:
        logger.warning("Request body declared %s bytes; limit=%dMB", declared, limit_mb)
        raise PayloadTooLarge(limit_mb)

    chunks: list[bytes] = []
    bytes_read = 0
    async for chunk in request.stream():
        bytes_read += len(chunk)
        if max_bytes and bytes_read > max_bytes:
            logger.warning("Request body exceeded max size. limit=%dMB", limit_mb)
            raise PayloadTooLarge(limit_mb)
        chunks.append(chunk)
    return b"".join(chunks)
