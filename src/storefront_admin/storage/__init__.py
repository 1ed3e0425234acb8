"""Image storage for admin records."""

from functools import lru_cache

from ..config import settings
from .base import SecurityException, StorageException, StorageProvider, ValidationException
from .images import ImageStore
from .local import LocalStorageProvider


@lru_cache(maxsize=1)
def get_image_store() -> ImageStore:
    """Image store backed by local storage, configured from settings."""
    provider = LocalStorageProvider(settings.storage_path, settings.storage_public_url)
    return ImageStore(
        provider,
        allowed_types=settings.allowed_image_types,
        max_size=settings.max_image_size,
        download_timeout=settings.image_download_timeout,
    )


__all__ = [
    "ImageStore",
    "LocalStorageProvider",
    "StorageProvider",
    "StorageException",
    "SecurityException",
    "ValidationException",
    "get_image_store",
]
