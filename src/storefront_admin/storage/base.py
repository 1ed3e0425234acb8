"""Core storage interfaces and exceptions."""

import re
from abc import ABC, abstractmethod


class StorageException(Exception):
    """Base exception for storage operations."""

    pass


class SecurityException(StorageException):
    """Security-related storage exception."""

    pass


class ValidationException(StorageException):
    """Content validation exception."""

    pass


class StorageProvider(ABC):
    """Abstract base class for storage providers."""

    @abstractmethod
    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        """Store ``content`` under ``key`` and return its public URL.

        Raises:
            StorageException: On upload failure
            SecurityException: On security validation failure
        """
        pass

    @abstractmethod
    async def download(self, key: str) -> bytes:
        """Download content by storage key."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete file by storage key."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if file exists."""
        pass

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Public URL for a stored key."""
        pass


def validate_storage_key(key: str) -> str:
    """Validate and sanitize storage key to prevent path traversal."""
    if ".." in key or key.startswith("/") or "\\" in key:
        raise SecurityException(f"Invalid storage key: {key}")

    sanitized_parts: list[str] = []
    for part in key.split("/"):
        # Keep alphanumeric, hyphens, underscores, dots
        sanitized = re.sub(r"[^a-zA-Z0-9._-]", "", part)
        if not sanitized:
            raise SecurityException(f"Invalid key component: {part}")
        sanitized_parts.append(sanitized)

    return "/".join(sanitized_parts)
