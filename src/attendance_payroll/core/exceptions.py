class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class NoActiveShift(DomainError):
    """No configured shift window covers the current time."""


class AlreadyCompleted(DomainError):
    """Attendance for the day is complete; no further action is allowed."""


class RecordNotFound(DomainError):
    """No attendance record exists for the given (employee, date)."""


class PersistenceFailure(DomainError):
    """The backing store failed to read or write."""


class RecordConflict(PersistenceFailure):
    """A record for the same (employee, date) already exists."""
