"""Domain-specific exceptions for notices app."""


class NoticesServiceError(Exception):
    """Base exception for all notices service errors."""
    pass


class NotInMessError(NoticesServiceError):
    """Raised when the user is not a member of the mess."""
    pass


class InsufficientPermissionsError(NoticesServiceError):
    """Raised when a member tries to post a notice."""
    pass
