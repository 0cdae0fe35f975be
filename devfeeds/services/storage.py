"""Blob storage for uploaded media."""

import logging
import secrets
from typing import Protocol

import httpx

from devfeeds.config import get_settings
from devfeeds.errors import UpstreamFailure, ValidationError
from devfeeds.models.mixins import utcnow

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    async def put(self, data: bytes, content_type: str, path: str) -> str:
        """Store bytes at ``path`` and return their public URL."""
        ...


class HttpBlobStore:
    """Object storage reached over its REST API (Supabase-compatible paths)."""

    def __init__(
        self,
        base_url: str | None = None,
        bucket: str | None = None,
        service_key: str | None = None,
    ) -> None:
        self.settings = get_settings()
        self.base_url = (base_url or self.settings.storage_url).rstrip("/")
        self.bucket = bucket or self.settings.storage_bucket
        self.service_key = service_key or self.settings.storage_service_key
        self.timeout = 60.0

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{path}"

    async def put(self, data: bytes, content_type: str, path: str) -> str:
        headers = {"Content-Type": content_type, "x-upsert": "false"}
        if self.service_key:
            headers["Authorization"] = f"Bearer {self.service_key}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/object/{self.bucket}/{path}",
                    content=data,
                    headers=headers,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Blob store upload failed for {path}: {e}")
            raise UpstreamFailure("Failed to upload file") from e

        return self.public_url(path)


def media_extension(filename: str | None, content_type: str) -> str:
    """File extension for an upload, falling back on its media type."""
    if filename and "." in filename:
        extension = filename.rsplit(".", 1)[1].lower()
        if extension.isalnum():
            return extension
    return "jpg" if content_type.startswith("image/") else "mp4"


def build_upload_path(owner_id: str, filename: str | None, content_type: str) -> str:
    """Per-user object path: ``{owner_id}/{millis}-{random}.{ext}``."""
    timestamp = int(utcnow().timestamp() * 1000)
    return (
        f"{owner_id}/{timestamp}-{secrets.token_hex(6)}."
        f"{media_extension(filename, content_type)}"
    )


def validate_upload(content_type: str | None, size: int, max_bytes: int) -> str:
    """Check an upload is an image or video within the size limit."""
    content_type = content_type or ""
    if not (content_type.startswith("image/") or content_type.startswith("video/")):
        raise ValidationError("File must be an image or video")
    if size > max_bytes:
        size_mb = size / 1024 / 1024
        max_mb = max_bytes / 1024 / 1024
        raise ValidationError(
            f"File size ({size_mb:.2f}MB) exceeds the maximum allowed size of {max_mb:g}MB",
            max_bytes=max_bytes,
        )
    return content_type


def get_blob_store() -> BlobStore:
    """Get blob store instance."""
    return HttpBlobStore()
