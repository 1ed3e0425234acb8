"""Local filesystem storage provider for development and self-hosted deployments."""

from pathlib import Path
from urllib.parse import quote

import aiofiles

from ..logging import get_logger
from .base import SecurityException, StorageException, StorageProvider

logger = get_logger(__name__)


class LocalStorageProvider(StorageProvider):
    """Local filesystem storage rooted at ``base_path``."""

    def __init__(self, base_path: Path | str, public_url_base: str | None = None):
        self.base_path = Path(base_path).resolve()
        self.public_url_base = public_url_base
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_safe_file_path(self, key: str) -> Path:
        """Get file path with security validation."""
        file_path = (self.base_path / key).resolve()

        # Resolved path must stay within base_path
        try:
            file_path.relative_to(self.base_path)
        except ValueError as e:
            raise SecurityException(f"Path traversal detected: {key}") from e

        return file_path

    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        logger.info("Uploading file", key=key, content_type=content_type, size=len(content))
        try:
            file_path = self._get_safe_file_path(key)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)

            return self.public_url(key)

        except SecurityException:
            raise
        except OSError as e:
            logger.error("File system error uploading", key=key, error=str(e))
            raise StorageException(f"Failed to write file: {e}") from e

    def public_url(self, key: str) -> str:
        if self.public_url_base:
            encoded_key = quote(key, safe="/")
            return f"{self.public_url_base.rstrip('/')}/{encoded_key}"
        return f"file://{self.base_path / key}"

    async def download(self, key: str) -> bytes:
        file_path = self._get_safe_file_path(key)
        if not file_path.exists():
            raise StorageException(f"File not found: {key}")

        try:
            async with aiofiles.open(file_path, "rb") as f:
                return await f.read()
        except OSError as e:
            logger.error("File system error downloading", key=key, error=str(e))
            raise StorageException(f"Failed to read file: {e}") from e

    async def delete(self, key: str) -> bool:
        file_path = self._get_safe_file_path(key)
        if not file_path.exists():
            return False

        try:
            file_path.unlink()
        except OSError as e:
            logger.error("File system error deleting", key=key, error=str(e))
            raise StorageException(f"Failed to delete file: {e}") from e

        logger.debug("Deleted file from local storage", key=key)
        return True

    async def exists(self, key: str) -> bool:
        try:
            return self._get_safe_file_path(key).exists()
        except SecurityException:
            return False
