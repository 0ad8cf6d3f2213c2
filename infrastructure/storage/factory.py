"""
Storage Factory
===============

Creates the storage backend selected by ``INFRASTRUCTURE["STORAGE_BACKEND"]``.
"""

import logging

from django.conf import settings

from .interface import StorageInterface


logger = logging.getLogger(__name__)


class StorageFactory:
    """
    Factory for creating storage backends.

    Usage:
        storage = StorageFactory.create()
    """

    @staticmethod
    def create(backend: str | None = None) -> StorageInterface:
        infrastructure = getattr(settings, "INFRASTRUCTURE", {})
        backend_type = backend or infrastructure.get("STORAGE_BACKEND", "s3")

        logger.info(f"Creating storage backend: {backend_type}")

        if backend_type == "s3":
            from .s3_adapter import S3StorageAdapter

            return S3StorageAdapter()
        if backend_type == "local":
            from .local_adapter import LocalStorageAdapter

            return LocalStorageAdapter()
        raise ValueError(f"Invalid storage backend: {backend_type}. Must be 's3' or 'local'")
