# -*- coding: utf-8 -*-
"""Progress photo blobs on local disk under ``settings.upload_dir``.

Photos are addressed as ``{user_id}/{check_in_id}/{photo_type}.{ext}``. Only that relative path
is recorded in the database; URLs are derived from it.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Optional

from fastapi import UploadFile

from ..config import settings
from ..errors import ValidationError

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}

MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
}

PHOTO_URL_PREFIX = "/api/photos/"


class LocalBlobStorage:
    def __init__(self, root: Path | None = None) -> None:
        self.root = Path(root or settings.upload_dir)

    def _resolve(self, relpath: str) -> Path:
        parts = [p for p in PurePosixPath(relpath.replace("\\", "/")).parts if p not in ("", ".", "..", "/")]
        if not parts:
            raise ValueError("empty storage path")
        resolved = self.root.joinpath(*parts).resolve()
        if not resolved.is_relative_to(self.root.resolve()):
            raise ValueError("storage path escapes upload root")
        return resolved

    def save(self, relpath: str, data: bytes) -> str:
        path = self._resolve(relpath)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return relpath

    def read(self, relpath: str) -> bytes:
        return self._resolve(relpath).read_bytes()

    def delete(self, relpath: str) -> None:
        self._resolve(relpath).unlink(missing_ok=True)

    def exists(self, relpath: str) -> bool:
        try:
            return self._resolve(relpath).is_file()
        except ValueError:
            return False


def _extension(filename: Optional[str]) -> str:
    suffix = Path(filename or "").suffix.lower().lstrip(".")
    if not suffix or not re.fullmatch(r"[a-z0-9]{1,8}", suffix):
        return "jpg"
    return suffix


def photo_storage_path(user_id: str, check_in_id: str, photo_type: str, filename: Optional[str]) -> str:
    return f"{user_id}/{check_in_id}/{photo_type}.{_extension(filename)}"


def photo_url(storage_path: str) -> str:
    return f"{PHOTO_URL_PREFIX}{storage_path}"


def media_type_for(storage_path: str) -> str:
    ext = storage_path.rsplit(".", 1)[-1].lower() if "." in storage_path else ""
    return MIME_TYPES.get(ext, "application/octet-stream")


def read_upload(upload: UploadFile) -> bytes:
    """Validate type and size of an uploaded photo and return its bytes."""
    content_type = (upload.content_type or "").lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("Invalid file type. Use JPEG, PNG, or WebP.", {"file": "unsupported content type"})

    max_bytes = int(settings.max_upload_mb) * 1024 * 1024
    chunks = []
    size = 0
    try:
        while True:
            chunk = upload.file.read(1024 * 256)
            if not chunk:
                break
            size += len(chunk)
            if size > max_bytes:
                raise ValidationError(
                    f"File too large. Maximum {settings.max_upload_mb}MB.", {"file": "too large"}
                )
            chunks.append(chunk)
    finally:
        upload.file.close()
    return b"".join(chunks)
