class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an entity does not exist for the calling account."""


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are invalid."""


class StorageError(DomainError):
    """Raised when the persistence layer fails."""
