"""
Mess management service.

Handles onboarding (creating a mess) and mess settings.
"""

import logging
from typing import Optional

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.messes.models import Mess, MessMembership, MessRole, generate_join_code

from .exceptions import (
    MessNotFoundError,
    AlreadyInMessError,
    NotMemberError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def create_mess(
    *,
    name: str,
    user: User,
    currency: Optional[str] = None,
    max_retries: int = 5
) -> Mess:
    """
    Create a new mess and make the creator its manager.

    This is a multi-step operation wrapped in a transaction:
    1. Generate a join code
    2. Create the mess
    3. Create the manager membership

    Args:
        name: Mess name
        user: User creating the mess
        currency: Optional currency code, defaults to the configured one
        max_retries: Maximum attempts to generate a unique join code

    Returns:
        Created Mess instance

    Raises:
        AlreadyInMessError: If the user already belongs to a mess
        RuntimeError: If cannot generate unique join code after retries
    """
    if MessMembership.objects.filter(user=user).exists():
        raise AlreadyInMessError("You already belong to a mess")

    # Retry logic outside transaction to handle join code collisions
    for attempt in range(max_retries):
        code = generate_join_code()

        if Mess.objects.filter(id=code).exists():
            continue

        try:
            with transaction.atomic():
                mess = Mess(id=code, name=name, manager=user)
                if currency:
                    mess.currency = currency
                mess.save(force_insert=True)

                MessMembership.objects.create(
                    user=user,
                    mess=mess,
                    role=MessRole.MANAGER
                )
        except IntegrityError:
            # Either the code was taken concurrently or the user joined elsewhere
            if MessMembership.objects.filter(user=user).exists():
                raise AlreadyInMessError("You already belong to a mess")
            continue

        logger.info("Mess %s created by user %s", mess.id, user.id)
        return mess

    raise RuntimeError(
        f"Failed to generate unique join code after {max_retries} attempts"
    )


def get_mess_by_id(*, mess_id: str) -> Mess:
    """
    Get a mess by its code.

    Raises:
        MessNotFoundError: If mess doesn't exist
    """
    try:
        return Mess.objects.select_related('manager').get(id=mess_id.upper())
    except Mess.DoesNotExist:
        raise MessNotFoundError(f"Mess {mess_id} not found")


def get_mess_for_user(*, user: User) -> Mess:
    """
    Return the mess the user belongs to.

    Raises:
        NotMemberError: If the user has not joined or created a mess yet
    """
    membership = user.mess_membership
    if membership is None:
        raise NotMemberError("You are not a member of any mess")
    return membership.mess


@transaction.atomic
def update_mess_settings(
    *,
    mess_id: str,
    user: User,
    name: Optional[str] = None,
    currency: Optional[str] = None
) -> Mess:
    """
    Update mess name and currency (manager only).

    Uses select_for_update to prevent concurrent modifications.

    Raises:
        MessNotFoundError: If mess doesn't exist
        InsufficientPermissionsError: If user is not a manager
    """
    try:
        mess = (
            Mess.objects
            .select_for_update()
            .get(id=mess_id)
        )
    except Mess.DoesNotExist:
        raise MessNotFoundError(f"Mess {mess_id} not found")

    if not mess.is_manager(user):
        logger.warning("User %s tried to change settings of mess %s", user.id, mess_id)
        raise InsufficientPermissionsError("Only managers can update mess settings")

    update_fields = ['updated_at']

    if name:
        mess.name = name
        update_fields.append('name')

    if currency:
        mess.currency = currency.upper()
        update_fields.append('currency')

    mess.save(update_fields=update_fields)

    return mess
