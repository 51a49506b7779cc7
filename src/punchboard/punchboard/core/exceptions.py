class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class EmployeeNotFound(NotFoundError):
    """Raised when an employee id does not resolve to an active employee."""


class ConflictError(DomainError):
    """Raised when a write collides with existing state."""


class DuplicatePunch(ConflictError):
    """Raised when the employee already completed the in/out cycle for the day."""


class InternalError(DomainError):
    """Raised when the store or transport fails unexpectedly."""
