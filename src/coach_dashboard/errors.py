"""Errors raised by application services."""


class ValidationError(ValueError):
    """Raised when input fails domain validation."""


class NotFoundError(LookupError):
    """Raised when a requested record does not exist."""
