"""Utilities for handling uploaded scorecard photos."""

from __future__ import annotations

from dataclasses import dataclass
import io
from typing import Collection, Mapping

from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from ..cache import fingerprint

MAX_PHOTO_SIZE = 5 * 1024 * 1024  # 5MB
CHUNK_SIZE = 1024 * 1024  # 1MB
PHOTO_TYPE_MAP: Mapping[str, str] = {
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
}
ALLOWED_PHOTO_TYPES: Collection[str] = frozenset(PHOTO_TYPE_MAP.values())


@dataclass(frozen=True)
class ScorecardPhoto:
    filename: str
    mime_type: str
    data: bytes
    fingerprint: str


def verify_photo_bytes(
    data: bytes,
    *,
    allowed_content_types: Collection[str] = ALLOWED_PHOTO_TYPES,
    photo_type_map: Mapping[str, str] = PHOTO_TYPE_MAP,
) -> str:
    """Return the MIME type Pillow detects, or raise 415."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            detected_format = (img.format or "").lower()
            img.verify()
    except (UnidentifiedImageError, OSError):
        raise HTTPException(status_code=415, detail="Unsupported media type")

    detected_mime = photo_type_map.get(detected_format)
    if detected_mime not in allowed_content_types:
        raise HTTPException(status_code=415, detail="Unsupported media type")
    return detected_mime


async def read_photo_upload(
    file: UploadFile,
    *,
    chunk_size: int = CHUNK_SIZE,
    max_size: int = MAX_PHOTO_SIZE,
    allowed_content_types: Collection[str] = ALLOWED_PHOTO_TYPES,
    photo_type_map: Mapping[str, str] = PHOTO_TYPE_MAP,
) -> ScorecardPhoto:
    """Read an uploaded scorecard image into memory.

    The upload is read in chunks so oversized files are rejected before they
    are fully buffered. Only the image types in ``allowed_content_types`` are
    accepted, and the declared type must match what Pillow detects. Nothing
    is written to disk; the bytes go straight to the extraction provider.
    """

    if file.content_type not in allowed_content_types:
        raise HTTPException(status_code=415, detail="Unsupported media type")

    buffer = bytearray()
    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        if len(buffer) + len(chunk) > max_size:
            raise HTTPException(status_code=413, detail="Uploaded file too large")
        buffer.extend(chunk)

    data = bytes(buffer)
    detected_mime = verify_photo_bytes(
        data,
        allowed_content_types=allowed_content_types,
        photo_type_map=photo_type_map,
    )
    if detected_mime != file.content_type:
        raise HTTPException(status_code=415, detail="Unsupported media type")
    return ScorecardPhoto(
        filename=file.filename or "",
        mime_type=detected_mime,
        data=data,
        fingerprint=fingerprint(data),
    )
