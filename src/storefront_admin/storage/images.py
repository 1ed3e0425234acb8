"""Image attachment for records that carry an image column."""

from __future__ import annotations

import base64
import binascii
import re
import uuid
from collections.abc import Iterable
from typing import Any

import aiohttp

from ..logging import get_logger
from .base import StorageException, StorageProvider, ValidationException, validate_storage_key

logger = get_logger(__name__)

_DATA_URI = re.compile(r"^data:(?P<type>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


class ImageStore:
    """Fetches an image from a source reference and attaches it to a record.

    Sources are ``data:`` URIs or ``http(s)`` URLs. The stored key is written
    to ``owner.<field>``; the caller's session persists it. Files are never
    removed here on replacement: the caller deletes the previous key with
    ``delete_keys`` once the new key is committed.
    """

    def __init__(
        self,
        provider: StorageProvider,
        allowed_types: list[str] | None = None,
        max_size: int = 5 * 1024 * 1024,
        download_timeout: int = 30,
    ):
        self.provider = provider
        self.allowed_types = set(allowed_types or _EXTENSIONS)
        self.max_size = max_size
        self.download_timeout = download_timeout

    async def upload_image(self, owner: Any, source: str | None, prefix: str, field: str) -> str | None:
        """Store the image referenced by ``source`` for ``owner``.

        Returns the new storage key, the current key when ``source`` points at
        the image already attached, or None when ``source`` is empty.
        """
        if not source:
            return None

        current = getattr(owner, field, None)
        if current and source in (current, self.provider.public_url(current)):
            return current

        content, content_type = await self._read_source(source)
        self._validate(content, content_type)

        key = validate_storage_key(
            f"{prefix.strip('/')}/{owner.id}/{uuid.uuid4().hex}.{_EXTENSIONS[content_type]}"
        )
        await self.provider.upload(key, content, content_type)

        setattr(owner, field, key)
        logger.info("Image attached", owner_id=owner.id, field=field, key=key)
        return key

    async def delete_keys(self, keys: Iterable[str]) -> None:
        """Remove stored files, logging any that cannot be deleted."""
        for key in keys:
            try:
                await self.provider.delete(key)
            except StorageException as e:
                logger.error("Failed to delete image", key=key, error=str(e))

    def url_for(self, key: str | None) -> str | None:
        return self.provider.public_url(key) if key else None

    async def _read_source(self, source: str) -> tuple[bytes, str]:
        if match := _DATA_URI.match(source):
            try:
                return base64.b64decode(match.group("data"), validate=True), match.group("type")
            except (binascii.Error, ValueError) as e:
                raise ValidationException("Image data is not valid base64") from e

        if source.startswith(("http://", "https://")):
            return await self._download(source)

        raise ValidationException("Unsupported image source; expected a data URI or URL")

    async def _download(self, url: str) -> tuple[bytes, str]:
        timeout = aiohttp.ClientTimeout(total=self.download_timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as http_session:
                async with http_session.get(url) as resp:
                    if resp.status != 200:
                        raise StorageException(f"Failed to download image: HTTP {resp.status}")
                    content = await resp.read()
                    content_type = resp.headers.get("Content-Type", "application/octet-stream")
        except aiohttp.ClientError as e:
            logger.error("Image download failed", url=url, error=str(e))
            raise StorageException(f"Failed to download image: {e}") from e

        return content, content_type.split(";")[0].strip().lower()

    def _validate(self, content: bytes, content_type: str) -> None:
        if content_type not in self.allowed_types or content_type not in _EXTENSIONS:
            raise ValidationException(f"Content type not allowed: {content_type}")
        if not content:
            raise ValidationException("Image is empty")
        if len(content) > self.max_size:
            raise ValidationException(f"File size {len(content)} exceeds limit {self.max_size}")
