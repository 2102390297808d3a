class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced block, room, student or activity does not exist."""


class ConflictError(DomainError):
    """Raised when a write collides with a unique key (e.g. a concurrent create)."""


class StorageUnavailableError(DomainError):
    """Raised when the database cannot be reached or times out."""
