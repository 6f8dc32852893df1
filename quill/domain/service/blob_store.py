"""Blob store contract for uploaded cover images."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from quill.domain.value import BlobRef


class BlobUpload(BaseModel):
    """An uploaded file as received from the client."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    filename: str
    content_type: str


class BlobStore(ABC):
    """Stores uploaded files and hands back a stable reference.

    URL construction is left to readers of the reference.
    """

    @abstractmethod
    async def store(self, upload: BlobUpload, prefix: str = "posts") -> BlobRef:
        """Persist an upload.

        Args:
            upload: File bytes and metadata
            prefix: Key namespace

        Returns:
            Reference to the stored object
        """
        pass

    @abstractmethod
    async def delete(self, ref: BlobRef) -> None:
        """Remove a stored object. Missing objects are ignored."""
        pass
