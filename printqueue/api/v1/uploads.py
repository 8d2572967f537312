"""Shared handling for browser image uploads (job and press pictures)."""

import logging

from fastapi import HTTPException, UploadFile

from printqueue.config import settings
from printqueue.storage.blob_storage import BlobStorage, InvalidImage, inspect_image

logger = logging.getLogger(__name__)

_CHUNK_BYTES = 1024 * 1024


async def read_image_upload(file: UploadFile, max_bytes: int | None = None) -> bytes:
    """Read an uploaded image in 1 MB chunks, enforcing the size cap."""
    if max_bytes is None:
        max_bytes = settings.max_upload_mb * 1024 * 1024

    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")

    chunks = []
    total = 0
    while True:
        chunk = await file.read(_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large (max {max_bytes // (1024 * 1024)} MB)",
            )
        chunks.append(chunk)

    content = b"".join(chunks)
    try:
        inspect_image(content)
    except InvalidImage as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return content


async def store_image(blobs: BlobStorage, folder: str, file: UploadFile) -> str:
    """Validate and upload an image. Returns its public URL."""
    content = await read_image_upload(file)
    try:
        return blobs.upload(folder, file.filename or "image", content, file.content_type)
    except Exception as exc:
        logger.exception("Image upload to %s failed", folder)
        raise HTTPException(status_code=500, detail=f"Failed to save upload: {exc}")
