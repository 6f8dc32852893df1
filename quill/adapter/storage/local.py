"""Filesystem-backed blob store for cover images.

Files are written under the configured upload directory and served back by
the API as static files, so a reference maps 1:1 onto a relative path.
"""

import re
from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os
import logfire

from quill.adapter.error import StorageError
from quill.domain.service.blob_store import BlobStore, BlobUpload
from quill.domain.value import BlobRef

EXTENSIONS_BY_TYPE = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def object_key(upload: BlobUpload, prefix: str) -> str:
    """Build a collision-free key, keeping the original extension when sane."""
    suffix = Path(upload.filename).suffix.lower()
    if not re.fullmatch(r"\.[a-z0-9]{1,8}", suffix):
        suffix = EXTENSIONS_BY_TYPE.get(upload.content_type, "")
    return f"{prefix}/{uuid4().hex}{suffix}"


class LocalBlobStore(BlobStore):
    """Blob store writing to the local filesystem."""

    def __init__(self, root: Path) -> None:
        """Initialize the store.

        Args:
            root: Directory objects are written under
        """
        self.root = root

    def _path_for(self, ref: BlobRef) -> Path:
        return self.root / ref.root

    async def store(self, upload: BlobUpload, prefix: str = "posts") -> BlobRef:
        """Write an upload to disk and return its key."""
        ref = BlobRef(object_key(upload, prefix))
        path = self._path_for(ref)
        with logfire.span("blob_store.store", key=ref.root, size=len(upload.data)):
            try:
                await aiofiles.os.makedirs(path.parent, exist_ok=True)
                async with aiofiles.open(path, "wb") as f:
                    await f.write(upload.data)
            except OSError as e:
                logfire.error("Failed to write upload", key=ref.root, error=str(e))
                raise StorageError(f"Failed to store {upload.filename}") from e
            logfire.info(
                "Upload stored", key=ref.root, content_type=upload.content_type
            )
            return ref

    async def delete(self, ref: BlobRef) -> None:
        """Remove a stored file. Missing files are ignored."""
        path = self._path_for(ref)
        try:
            await aiofiles.os.remove(path)
            logfire.info("Upload deleted", key=ref.root)
        except FileNotFoundError:
            logfire.debug("Upload already gone", key=ref.root)
        except OSError as e:
            raise StorageError(f"Failed to delete {ref.root}") from e


class InMemoryBlobStore(BlobStore):
    """Blob store keeping objects in a dict, for tests."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}

    async def store(self, upload: BlobUpload, prefix: str = "posts") -> BlobRef:
        ref = BlobRef(object_key(upload, prefix))
        self.objects[ref.root] = upload.data
        return ref

    async def delete(self, ref: BlobRef) -> None:
        self.objects.pop(ref.root, None)
