class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DayExhaustedError(DomainError):
    """Raised when every punch of the day's sequence was already registered."""


class RenderError(Exception):
    """Raised when a report artifact cannot be serialized."""
