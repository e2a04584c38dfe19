class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class RejectedError(DomainError):
    """Raised when a business guard refuses an otherwise valid operation."""


class ConsistencyError(DomainError):
    """Raised when a derived counter could not be updated with its event.

    The triggering insert is rolled back together with the counter change.
    """


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
