class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Raised when a uniqueness rule would be broken (duplicate pin, attendance already marked)."""

    status_code = 409


class EmailDeliveryError(DomainError):
    status_code = 500


class AIServiceError(DomainError):
    """Raised when the generative AI provider is unavailable or fails."""

    status_code = 502
