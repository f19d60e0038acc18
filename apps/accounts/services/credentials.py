"""Sign-in and email confirmation for mess accounts."""

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .exceptions import InactiveAccountError, InvalidCredentialsError, InvalidTokenError

User = get_user_model()
logger = logging.getLogger(__name__)

BAD_LOGIN = "Invalid email or password"


def _locked_user(**lookup):
    return User.objects.select_for_update().get(**lookup)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check an email/password pair and stamp ``last_login``.

    Unknown emails and wrong passwords raise the same error so the
    response does not reveal which accounts exist. A deactivated account
    is only reported once the password matched.
    """
    try:
        account = _locked_user(email=User.objects.normalize_email(email))
    except User.DoesNotExist:
        raise InvalidCredentialsError(BAD_LOGIN)

    if not account.check_password(password):
        logger.warning("Failed sign-in for account %s", account.id)
        raise InvalidCredentialsError(BAD_LOGIN)
    if not account.is_active:
        raise InactiveAccountError("Account is deactivated")

    account.last_login = timezone.now()
    account.save(update_fields=['last_login'])
    return account


@transaction.atomic
def verify_user_email(*, user_id: UUID, token: str) -> User:
    """Confirm the account's email; the token is single-use."""
    account = _locked_user(id=user_id)

    expected = account.verification_token
    if not token or not expected or token != expected:
        raise InvalidTokenError("Invalid verification token")

    account.email_verified = True
    account.verification_token = None
    account.save(update_fields=['email_verified', 'verification_token'])

    logger.info("Email verified for account %s", account.id)
    return account
