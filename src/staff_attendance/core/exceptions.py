class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the caller's identity cannot be established."""


class NotAuthenticatedError(AuthenticationError):
    """Raised when no user identity can be resolved for the caller."""


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class EmailAlreadyRegisteredError(ValidationError):
    """Raised when registering an email that already belongs to a user."""


class AttendanceError(DomainError):
    """Base class for check-in/check-out state machine violations."""


class AlreadyCheckedInError(AttendanceError):
    """Raised on a second check-in for the same user and day."""


class NoCheckInFoundError(AttendanceError):
    """Raised on check-out when the user has no record for the day."""


class AlreadyCheckedOutError(AttendanceError):
    """Raised on check-out when the day's record is already closed."""


class ConcurrentModificationError(DomainError):
    """Raised when a stored collection changed between read and write."""
