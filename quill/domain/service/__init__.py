"""Domain services."""

from .access_gate import AccessGate, AuthorizationDecision, Denial
from .base import Service
from .blob_store import BlobStore, BlobUpload
from .identity_service import IdentityService, TokenPair
from .jwt_service import JWTService
from .post_service import PostService
from .taxonomy_service import TaxonomyService

__all__ = [
    "AccessGate",
    "AuthorizationDecision",
    "BlobStore",
    "BlobUpload",
    "Denial",
    "IdentityService",
    "JWTService",
    "PostService",
    "Service",
    "TaxonomyService",
    "TokenPair",
]
