"""
Local Storage Adapter
=====================

StorageInterface on the local filesystem (MEDIA_ROOT). Used in development
and tests; "signed" URLs carry the expiry as a query parameter only.
"""

import logging
import time
from typing import BinaryIO

from django.core.files.storage import FileSystemStorage

from .interface import StorageException, StorageFile, StorageInterface


logger = logging.getLogger(__name__)


class LocalStorageAdapter(StorageInterface):
    def __init__(self, location=None):
        self.storage = FileSystemStorage(location=location)

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        try:
            saved_path = self.storage.save(path, file)
            logger.info(f"Stored file locally: {saved_path}")
            return StorageFile(key=saved_path, size=self.storage.size(saved_path), content_type=content_type)
        except OSError as e:
            logger.error(f"Failed to store file locally: {path}. Error: {str(e)}")
            raise StorageException(f"Local upload failed: {str(e)}") from e

    def delete(self, key: str) -> bool:
        if not self.storage.exists(key):
            return False
        self.storage.delete(key)
        return True

    def get_signed_url(self, key: str, expires_in: int = 3600) -> str:
        if not self.storage.exists(key):
            raise StorageException(f"File not found: {key}")
        return f"{self.storage.url(key)}?expires={int(time.time()) + expires_in}"

    def exists(self, key: str) -> bool:
        return self.storage.exists(key)
