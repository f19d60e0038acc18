"""Errors raised by the account services."""


class AccountsServiceError(Exception):
    """Base class; views turn these into ``{"error": ...}`` responses."""


class UserRegistrationError(AccountsServiceError):
    """The email is already taken."""


class InvalidCredentialsError(AccountsServiceError):
    """Unknown email or wrong password."""


class InactiveAccountError(AccountsServiceError):
    """The account was deactivated by staff."""


class InvalidTokenError(AccountsServiceError):
    """Email confirmation token missing, used or wrong."""
