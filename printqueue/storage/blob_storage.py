"""Image uploads for jobs and presses.

Files go to a Supabase Storage bucket under ``<folder>/<millis>-<name>``;
callers only keep the returned public URL.
"""

import io
import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from PIL import Image, UnidentifiedImageError
from supabase import Client

from printqueue.db.supabase_client import get_supabase

logger = logging.getLogger(__name__)

JOB_IMAGES = "job-images"
PRESS_IMAGES = "press-images"


class InvalidImage(ValueError):
    """Uploaded bytes are not a readable image."""


def inspect_image(content: bytes) -> Tuple[int, int]:
    """Check the bytes decode as an image. Returns (width, height)."""
    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
            return img.size
    except (UnidentifiedImageError, OSError, SyntaxError, EOFError, ValueError) as exc:
        raise InvalidImage(f"Not a valid image: {exc}") from exc


def object_name(folder: str, filename: str) -> str:
    safe = filename.replace("/", "_").strip() or "image"
    return f"{folder}/{int(time.time() * 1000)}-{safe}"


class BlobStorage(ABC):

    @abstractmethod
    def upload(self, folder: str, filename: str, content: bytes, content_type: str) -> str:
        """Store the file and return a URL the browser can load."""
        ...


class SupabaseBlobStorage(BlobStorage):

    def __init__(self, bucket: str, client: Optional[Client] = None):
        self._bucket = bucket
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def upload(self, folder: str, filename: str, content: bytes, content_type: str) -> str:
        path = object_name(folder, filename)
        bucket = self.client.storage.from_(self._bucket)
        bucket.upload(path, content, {"content-type": content_type})
        logger.info("Uploaded %s (%d bytes) to bucket %s", path, len(content), self._bucket)
        return bucket.get_public_url(path)


class MemoryBlobStorage(BlobStorage):
    """Keeps uploads in a dict; URLs use a ``memory://`` scheme."""

    def __init__(self):
        self.objects: Dict[str, bytes] = {}

    def upload(self, folder: str, filename: str, content: bytes, content_type: str) -> str:
        path = object_name(folder, filename)
        self.objects[path] = content
        return f"memory://{path}"
