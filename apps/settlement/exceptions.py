"""
Domain exceptions for settlement app.

These exceptions are raised while loading month data and computing
balances. They represent bad input rather than HTTP concerns.

Exception Hierarchy:
    SettlementError (base)
    ├── InvalidPeriodError
    └── MalformedRecordError

Usage:
    from apps.settlement.exceptions import InvalidPeriodError

    try:
        period = Period.parse(value)
    except InvalidPeriodError as e:
        return Response({'error': str(e)}, status=400)
"""


class SettlementError(Exception):
    """
    Base exception for all settlement errors.

    Views can catch this single class to turn any settlement failure into
    a 400 response.
    """

    pass


class InvalidPeriodError(SettlementError):
    """
    Raised when a period string is not a valid month.

    Periods must be in YYYY-MM format (e.g., '2025-01').
    """

    pass


class MalformedRecordError(SettlementError):
    """
    Raised when a stored row cannot be turned into a typed record.

    Examples: a missing or negative amount, an unknown expense category,
    a meal flag that is not a boolean. Such rows never reach the
    calculator.
    """

    pass
