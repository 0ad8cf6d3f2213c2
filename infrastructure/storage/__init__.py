"""
Storage Abstraction Layer
==========================

Unified interface for private file storage (S3/MinIO or local filesystem).
"""

from .factory import StorageFactory
from .interface import StorageException, StorageFile, StorageInterface


__all__ = [
    "StorageInterface",
    "StorageFile",
    "StorageException",
    "StorageFactory",
]
