"""
Domain exceptions for finance app.

This module defines the exception hierarchy for expense, deposit, grocery
and shopping list errors. Services raise them; views map them to
``{'error': ...}`` responses.

Exception Hierarchy:
    FinanceServiceError (base)
    ├── NotInMessError              (403)
    ├── InsufficientPermissionsError (403)
    ├── MemberNotFoundError          (400)
    ├── InvalidAmountError           (400)
    ├── ShoppingItemNotFoundError    (404)
    └── ItemAlreadyBoughtError       (400)
"""


class FinanceServiceError(Exception):
    """Base exception for finance service errors."""
    pass


class NotInMessError(FinanceServiceError):
    """Raised when the acting user does not belong to the mess."""
    pass


class InsufficientPermissionsError(FinanceServiceError):
    """Raised when a member attempts a manager-only action."""
    pass


class MemberNotFoundError(FinanceServiceError):
    """Raised when a payer or depositor is not a member of the mess."""
    pass


class InvalidAmountError(FinanceServiceError):
    """Raised when an amount is zero or negative."""
    pass


class ShoppingItemNotFoundError(FinanceServiceError):
    """Shopping list item not found in the caller's mess."""
    pass


class ItemAlreadyBoughtError(FinanceServiceError):
    """Shopping list item is already marked as bought."""
    pass
