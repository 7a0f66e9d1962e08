class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates an attendance policy.

    These are user-correctable conditions (HTTP 4xx), never store failures.
    """


class OpenSessionError(ValidationError):
    """Raised when checking in while another session is still open."""


class CheckInWindowError(ValidationError):
    """Raised when the check-in time is outside every eligible window."""


class OvertimeNotApprovedError(ValidationError):
    """Raised when checking in for overtime without an approved request."""


class CheckInLimitError(ValidationError):
    """Raised when the daily check-in cap for a session is already used."""


class CheckoutTooEarlyError(ValidationError):
    """Raised when checking out before the session's checkout boundary."""


class EntryNotFoundError(ValidationError):
    """Raised when an attendance entry or request does not exist."""


class AuthorizationError(DomainError):
    """Raised when a person acts on a record they do not own."""
