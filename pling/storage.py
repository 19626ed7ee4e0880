# pling/storage.py
"""Local-disk image storage for listing photos."""
import uuid
from pathlib import Path

from fastapi import UploadFile

from . import settings

URL_PREFIX = "/uploads"

# content type -> file extension
ALLOWED_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


def upload_root() -> Path:
    root = Path(settings.UPLOAD_DIR)
    root.mkdir(parents=True, exist_ok=True)
    return root


async def save_image(upload: UploadFile) -> str:
    """Persist an uploaded image and return the URL it is served under.

    Raises ValueError for unsupported content types, empty files and files
    larger than MAX_UPLOAD_BYTES.
    """
    ext = ALLOWED_TYPES.get((upload.content_type or "").lower())
    if ext is None:
        raise ValueError(f"Unsupported file type: {upload.content_type}")
    content = await upload.read(settings.MAX_UPLOAD_BYTES + 1)
    if not content:
        raise ValueError("Empty file")
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise ValueError(f"File exceeds {settings.MAX_UPLOAD_BYTES} bytes")
    name = f"{uuid.uuid4().hex}{ext}"
    (upload_root() / name).write_bytes(content)
    return f"{URL_PREFIX}/{name}"
