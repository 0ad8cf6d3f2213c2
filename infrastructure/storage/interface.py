"""
Storage Interface
=================

Abstract base class for file storage. Seller identity documents are the
main tenant: they are private and only ever exposed through signed URLs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional


@dataclass
class StorageFile:
    """
    Represents a stored file with its metadata.

    Attributes:
        key: Unique identifier/path for the file
        size: File size in bytes
        content_type: MIME type of the file
        bucket: Storage bucket/container name (optional)
    """

    key: str
    size: int
    content_type: str
    bucket: Optional[str] = None


class StorageInterface(ABC):
    """
    Abstract interface for file storage operations.

    Concrete implementations:
        - S3StorageAdapter: AWS S3 / MinIO through django-storages
        - LocalStorageAdapter: MEDIA_ROOT on the local filesystem
    """

    @abstractmethod
    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        """
        Upload a file to storage.

        Raises:
            StorageException: If upload fails
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a file; returns False when it did not exist."""

    @abstractmethod
    def get_signed_url(self, key: str, expires_in: int = 3600) -> str:
        """
        Get a time-limited URL for a private file.

        Raises:
            StorageException: If the file does not exist or URL generation fails
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if a file exists in storage."""


class StorageException(Exception):
    """Base exception for storage operations."""

    pass
