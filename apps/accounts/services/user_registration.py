"""Account sign-up."""

import logging
import secrets

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from .exceptions import UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


@transaction.atomic
def register_user(*, email: str, password: str, display_name: str = "") -> User:
    """
    Create an account holding a fresh email confirmation token.

    The account is not attached to any mess. Creating or joining one is a
    separate onboarding step in the messes app.

    Raises:
        UserRegistrationError: the email is already registered
    """
    try:
        # Savepoint so the unique violation does not poison the outer transaction
        with transaction.atomic():
            account = User.objects.create_user(
                email=email,
                password=password,
                display_name=display_name,
                verification_token=secrets.token_urlsafe(TOKEN_BYTES),
            )
    except IntegrityError:
        raise UserRegistrationError(f"An account with email {email} already exists")

    logger.info("Registered account %s", account.id)
    return account
