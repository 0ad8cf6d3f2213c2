"""
Storage Adapter Tests
======================
"""

import tempfile
from io import BytesIO
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError
from django.core.files.base import ContentFile
from django.test import SimpleTestCase

from infrastructure.storage import StorageException, StorageFactory
from infrastructure.storage.local_adapter import LocalStorageAdapter
from infrastructure.storage.s3_adapter import S3StorageAdapter


class LocalStorageAdapterTest(SimpleTestCase):
    def setUp(self):
        self.storage = LocalStorageAdapter(location=tempfile.mkdtemp(prefix="codemart-storage-"))

    def test_upload_and_exists(self):
        stored = self.storage.upload(ContentFile(b"%PDF-1.4", name="id.pdf"), "seller_docs/id.pdf", "application/pdf")

        self.assertTrue(self.storage.exists(stored.key))
        self.assertEqual(stored.size, 8)
        self.assertEqual(stored.content_type, "application/pdf")

    def test_signed_url_has_expiry(self):
        stored = self.storage.upload(ContentFile(b"data", name="a.txt"), "docs/a.txt", "text/plain")

        url = self.storage.get_signed_url(stored.key, expires_in=60)

        self.assertIn("expires=", url)

    def test_signed_url_for_missing_file(self):
        with self.assertRaises(StorageException):
            self.storage.get_signed_url("docs/missing.txt")

    def test_delete(self):
        stored = self.storage.upload(ContentFile(b"data", name="a.txt"), "docs/a.txt", "text/plain")

        self.assertTrue(self.storage.delete(stored.key))
        self.assertFalse(self.storage.delete(stored.key))


@patch("infrastructure.storage.s3_adapter.S3Boto3Storage")
class S3StorageAdapterTest(SimpleTestCase):
    def test_upload(self, mock_storage_cls):
        backend = MagicMock()
        backend.save.return_value = "seller_docs/id.pdf"
        backend.size.return_value = 42
        mock_storage_cls.return_value = backend

        stored = S3StorageAdapter().upload(BytesIO(b"x"), "seller_docs/id.pdf", "application/pdf")

        self.assertEqual(stored.key, "seller_docs/id.pdf")
        self.assertEqual(stored.size, 42)
        mock_storage_cls.assert_called_once_with(default_acl="private", querystring_auth=True)

    def test_upload_error(self, mock_storage_cls):
        backend = MagicMock()
        backend.save.side_effect = ClientError({"Error": {"Code": "AccessDenied", "Message": "no"}}, "PutObject")
        mock_storage_cls.return_value = backend

        with self.assertRaises(StorageException):
            S3StorageAdapter().upload(BytesIO(b"x"), "k", "text/plain")

    def test_delete_missing(self, mock_storage_cls):
        backend = MagicMock()
        backend.exists.return_value = False
        mock_storage_cls.return_value = backend

        self.assertFalse(S3StorageAdapter().delete("k"))
        backend.delete.assert_not_called()

    def test_signed_url(self, mock_storage_cls):
        backend = MagicMock()
        backend.connection.meta.client.generate_presigned_url.return_value = "https://s3/signed"
        mock_storage_cls.return_value = backend

        url = S3StorageAdapter().get_signed_url("k", expires_in=120)

        self.assertEqual(url, "https://s3/signed")
        kwargs = backend.connection.meta.client.generate_presigned_url.call_args.kwargs
        self.assertEqual(kwargs["ExpiresIn"], 120)

    def test_exists_swallows_client_errors(self, mock_storage_cls):
        backend = MagicMock()
        backend.exists.side_effect = ClientError({"Error": {"Code": "500", "Message": "boom"}}, "HeadObject")
        mock_storage_cls.return_value = backend

        self.assertFalse(S3StorageAdapter().exists("k"))


class StorageFactoryTest(SimpleTestCase):
    def test_local(self):
        self.assertIsInstance(StorageFactory.create("local"), LocalStorageAdapter)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            StorageFactory.create("ftp")
