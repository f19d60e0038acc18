"""
Domain-specific exceptions for messes app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MessesServiceError(Exception):
    """Base exception for all messes service errors."""
    pass


class MessNotFoundError(MessesServiceError):
    """Raised when a mess does not exist."""
    pass


class InvalidJoinCodeError(MessesServiceError):
    """Raised when no mess matches a join code."""
    pass


class AlreadyInMessError(MessesServiceError):
    """Raised when a user who already belongs to a mess tries to create or join one."""
    pass


class NotMemberError(MessesServiceError):
    """Raised when a user is not a member of the mess."""
    pass


class CannotChangeOwnRoleError(MessesServiceError):
    """Raised when a manager tries to change their own role."""
    pass


class CannotRemoveSelfError(MessesServiceError):
    """Raised when a manager tries to remove themselves."""
    pass


class LastManagerError(MessesServiceError):
    """Raised when an action would leave the mess without a manager."""
    pass


class InsufficientPermissionsError(MessesServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass
