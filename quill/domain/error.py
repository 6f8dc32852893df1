"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Raised when a submission is missing or has invalid fields.

    Carries every violation, not just the first.
    """

    def __init__(self, message: str, fields: list[str] | None = None):
        self.fields = fields or []
        super().__init__(message)

    @classmethod
    def missing_fields(cls, fields: list[str]) -> "ValidationError":
        return cls(f"Missing required fields: {', '.join(fields)}", fields=fields)


class ConflictError(DomainError):
    """Raised when a unique key (slug, name, email) is already taken."""

    pass


class AuthenticationError(DomainError):
    """Raised when a credential is missing, invalid or expired."""

    pass


class ForbiddenError(DomainError):
    """Raised when an authenticated principal lacks permission."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found (or not visible)."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
