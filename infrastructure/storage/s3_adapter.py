"""
S3 Storage Adapter
==================

StorageInterface backed by AWS S3 (or MinIO) via django-storages. Signed
URLs are generated with the boto3 client behind the storage backend.
"""

import logging
from typing import BinaryIO

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from storages.backends.s3boto3 import S3Boto3Storage

from .interface import StorageException, StorageFile, StorageInterface


logger = logging.getLogger(__name__)


class S3StorageAdapter(StorageInterface):
    """
    AWS S3 storage implementation using django-storages.

    Configuration (in settings.py):
        AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_STORAGE_BUCKET_NAME,
        AWS_S3_REGION_NAME, AWS_S3_ENDPOINT_URL (MinIO)
    """

    def __init__(self):
        self.storage = S3Boto3Storage(default_acl="private", querystring_auth=True)
        self.bucket_name = getattr(settings, "AWS_STORAGE_BUCKET_NAME", "codemart")

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        try:
            if hasattr(file, "content_type"):
                file.content_type = content_type
            saved_path = self.storage.save(path, file)
            size = self.storage.size(saved_path)

            logger.info(f"Uploaded file to S3: {saved_path}")

            return StorageFile(key=saved_path, size=size, content_type=content_type, bucket=self.bucket_name)

        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload file to S3: {path}. Error: {str(e)}")
            raise StorageException(f"S3 upload failed: {str(e)}") from e

    def delete(self, key: str) -> bool:
        try:
            if not self.storage.exists(key):
                logger.warning(f"File not found in S3, cannot delete: {key}")
                return False
            self.storage.delete(key)
            logger.info(f"Deleted file from S3: {key}")
            return True

        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete file from S3: {key}. Error: {str(e)}")
            raise StorageException(f"S3 deletion failed: {str(e)}") from e

    def get_signed_url(self, key: str, expires_in: int = 3600) -> str:
        try:
            client = self.storage.connection.meta.client
            return client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket_name, "Key": key},
                ExpiresIn=expires_in,
            )

        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to generate signed URL for S3 key: {key}. Error: {str(e)}")
            raise StorageException(f"URL generation failed: {str(e)}") from e

    def exists(self, key: str) -> bool:
        try:
            return self.storage.exists(key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error checking existence of S3 key: {key}. Error: {str(e)}")
            return False
