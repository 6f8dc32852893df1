"""Blob storage infrastructure providers."""

from dishka import Scope, provide

from quill.adapter.storage import LocalBlobStore
from quill.config import UploadSettings
from quill.domain.service import BlobStore
from quill.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Blob storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider writing cover images to local disk."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_blob_store(self, upload_settings: UploadSettings) -> BlobStore:
        """Provide local filesystem blob store."""
        return LocalBlobStore(root=upload_settings.directory)
