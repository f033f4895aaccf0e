"""
Upload service: stores post images in the public upload directory.

Only the declared content type is checked; the bytes are not inspected.
The body is read in chunks so an oversized upload is rejected as soon as
it crosses the limit, and nothing is written to disk until the whole file
has been accepted.
"""
import logging
import os
import random
import re
import time
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from blogsite.config import settings
from blogsite.errors import UploadError

logger = logging.getLogger(__name__)

IMAGE_MIME_RE = re.compile(r"^image/(png|jpe?g|gif|webp)$", re.IGNORECASE)
UPLOAD_URL_PREFIX = "/uploads"
_CHUNK_SIZE = 64 * 1024


def unique_filename(original_name: str | None, field_name: str = "image") -> str:
    """Return ``<field>-<epoch ms>-<random><ext>`` keeping the original extension."""
    ext = os.path.splitext(original_name or "")[1]
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{field_name}-{suffix}{ext}"


async def _read_limited(upload: UploadFile, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    size = 0
    while True:
        chunk = await upload.read(_CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise UploadError("File too large", code=UploadError.TOO_LARGE)
        chunks.append(chunk)
    return b"".join(chunks)


async def store_image(
    upload: UploadFile | None,
    upload_dir: str | Path | None = None,
    max_bytes: int | None = None,
) -> str:
    """Validate and persist *upload*; return the public URL of the stored file."""
    if upload is None or not upload.filename:
        raise UploadError("No file uploaded", code=UploadError.NO_FILE)

    if not IMAGE_MIME_RE.match(upload.content_type or ""):
        raise UploadError("Only image files are allowed", code=UploadError.UNSUPPORTED_TYPE)

    data = await _read_limited(upload, max_bytes or settings.MAX_UPLOAD_BYTES)

    target_dir = Path(upload_dir or settings.UPLOAD_DIR)
    filename = unique_filename(upload.filename)
    target = target_dir / filename
    await run_in_threadpool(target_dir.mkdir, parents=True, exist_ok=True)
    await run_in_threadpool(target.write_bytes, data)

    logger.info("Stored upload %s (%d bytes)", filename, len(data))
    return f"{UPLOAD_URL_PREFIX}/{filename}"
