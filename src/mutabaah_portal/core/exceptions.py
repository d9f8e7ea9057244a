class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PeriodClosedError(DomainError):
    """Raised when a ledger write targets a locked period."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConflictError(DomainError):
    """Raised on a unique-constraint or concurrent-update collision."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""
