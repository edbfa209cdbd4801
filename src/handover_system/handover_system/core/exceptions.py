from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str = "", *, code: str | None = None):
        super().__init__(message or (code or self.code))
        if code:
            self.code = code


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class AuthorizationError(ValidationError):
    """Raised when a write is attempted without a valid admin credential."""

    code = "UNAUTHORIZED"


class PersistenceError(DomainError):
    """Raised when the state store fails to load or save."""

    code = "PERSISTENCE_ERROR"
