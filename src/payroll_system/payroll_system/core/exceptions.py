class DomainError(Exception):
    """Base exception for payroll rule violations."""


class ValidationError(DomainError):
    """Raised when an incoming payload is malformed or cannot be parsed."""
