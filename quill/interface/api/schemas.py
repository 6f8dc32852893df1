"""Response envelopes shared by all routes."""

from typing import Generic, Optional, TypeVar

from quill.application.usecase.base import CamelModel

T = TypeVar("T")


class ApiResponse(CamelModel, Generic[T]):
    """Standard envelope: `{success, message?, data?}`."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class PagedResponse(ApiResponse[T], Generic[T]):
    """Envelope for a page of results."""

    total: int
    total_pages: int
    current_page: int


class CountedResponse(ApiResponse[T], Generic[T]):
    """Envelope for a complete collection."""

    count: int


class ErrorResponse(CamelModel):
    """Body of every error response."""

    success: bool = False
    message: str
    errors: Optional[list[str]] = None  # Offending fields, when known
    error: Optional[str] = None  # Internal detail, debug mode only
