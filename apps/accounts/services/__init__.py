"""Account services: sign-up, sign-in, email confirmation and profile edits."""

from .credentials import authenticate_user, verify_user_email
from .exceptions import (
    AccountsServiceError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserRegistrationError,
)
from .profile_management import update_profile
from .user_registration import register_user

__all__ = [
    'AccountsServiceError',
    'InactiveAccountError',
    'InvalidCredentialsError',
    'InvalidTokenError',
    'UserRegistrationError',
    'authenticate_user',
    'register_user',
    'update_profile',
    'verify_user_email',
]
