"""
Domain-specific exceptions for meals app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MealsServiceError(Exception):
    """Base exception for all meals service errors."""
    pass


class NotInMessError(MealsServiceError):
    """Raised when the acting user is not a member of the mess."""
    pass


class NotMemberError(MealsServiceError):
    """Raised when the member whose meals are changed is not in the mess."""
    pass


class InsufficientPermissionsError(MealsServiceError):
    """Raised when a member tries to change someone else's meals."""
    pass


class InvalidMealTypeError(MealsServiceError):
    """Raised for anything other than breakfast, lunch or dinner."""
    pass
