"""Blob store implementations."""

from .local import InMemoryBlobStore, LocalBlobStore

__all__ = ["InMemoryBlobStore", "LocalBlobStore"]
