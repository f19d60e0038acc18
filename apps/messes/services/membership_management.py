"""
Membership management service.

Handles joining a mess, listing and removing members, and member rent.
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.messes.models import Mess, MessMembership, MessRole

from .exceptions import (
    MessNotFoundError,
    InvalidJoinCodeError,
    AlreadyInMessError,
    NotMemberError,
    CannotRemoveSelfError,
    LastManagerError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def _get_managed_mess(*, mess_id: str, user: User, action: str) -> Mess:
    try:
        mess = Mess.objects.get(id=mess_id)
    except Mess.DoesNotExist:
        raise MessNotFoundError(f"Mess {mess_id} not found")

    if not mess.is_manager(user):
        logger.warning("User %s tried to %s in mess %s", user.id, action, mess_id)
        raise InsufficientPermissionsError(f"Only managers can {action}")

    return mess


@transaction.atomic
def join_mess(*, code: str, user: User) -> MessMembership:
    """
    Join a mess using its join code.

    Codes are matched case-insensitively. Switching mess is not supported,
    so a user who already belongs to one is rejected.

    Args:
        code: Join code shared by the mess manager
        user: User joining the mess

    Returns:
        Created MessMembership instance

    Raises:
        InvalidJoinCodeError: If no mess has that code
        AlreadyInMessError: If user already belongs to a mess
    """
    code = (code or '').strip().upper()

    try:
        mess = (
            Mess.objects
            .select_for_update()
            .get(id=code)
        )
    except Mess.DoesNotExist:
        raise InvalidJoinCodeError("Invalid mess code")

    if MessMembership.objects.filter(user=user).exists():
        raise AlreadyInMessError("You already belong to a mess")

    try:
        with transaction.atomic():
            membership = MessMembership.objects.create(
                user=user,
                mess=mess,
                role=MessRole.MEMBER
            )
    except IntegrityError:
        # Database constraint caught a concurrent join
        raise AlreadyInMessError("You already belong to a mess")

    logger.info("User %s joined mess %s", user.id, mess.id)
    return membership


@transaction.atomic
def remove_member(
    *,
    mess_id: str,
    user_id: UUID,
    removed_by: User
) -> None:
    """
    Remove a member from a mess (manager only).

    The removed user is free to create or join a mess again afterwards.

    Raises:
        MessNotFoundError: If mess doesn't exist
        InsufficientPermissionsError: If removed_by is not a manager
        CannotRemoveSelfError: If a manager tries to remove themselves
        NotMemberError: If target user is not a member
        LastManagerError: If the target is the only manager
    """
    mess = _get_managed_mess(mess_id=mess_id, user=removed_by, action='remove members')

    if str(removed_by.id) == str(user_id):
        raise CannotRemoveSelfError("You cannot remove yourself from the mess")

    try:
        membership = (
            MessMembership.objects
            .select_for_update()
            .get(mess=mess, user_id=user_id)
        )
    except MessMembership.DoesNotExist:
        raise NotMemberError("User is not a member of this mess")

    if membership.is_manager and mess.manager_count() <= 1:
        raise LastManagerError("A mess must keep at least one manager")

    membership.delete()
    logger.info("User %s removed from mess %s by %s", user_id, mess.id, removed_by.id)


def get_mess_members(*, mess_id: str) -> QuerySet[MessMembership]:
    """
    Get all members of a mess, managers first, then by display name.

    Raises:
        MessNotFoundError: If mess doesn't exist
    """
    if not Mess.objects.filter(id=mess_id).exists():
        raise MessNotFoundError(f"Mess {mess_id} not found")

    # 'manager' sorts before 'member'
    return (
        MessMembership.objects
        .filter(mess_id=mess_id)
        .select_related('user')
        .order_by('role', 'user__display_name', 'user__email')
    )


@transaction.atomic
def update_member_rent(
    *,
    mess_id: str,
    user_id: UUID,
    monthly_rent: Decimal,
    updated_by: User
) -> MessMembership:
    """
    Set the monthly rent a member owes (manager only).

    Raises:
        MessNotFoundError: If mess doesn't exist
        InsufficientPermissionsError: If updated_by is not a manager
        NotMemberError: If target user is not a member
        ValueError: If monthly_rent is negative
    """
    if monthly_rent < 0:
        raise ValueError("Monthly rent cannot be negative")

    mess = _get_managed_mess(mess_id=mess_id, user=updated_by, action='edit rent')

    try:
        membership = (
            MessMembership.objects
            .select_for_update()
            .get(mess=mess, user_id=user_id)
        )
    except MessMembership.DoesNotExist:
        raise NotMemberError("User is not a member of this mess")

    membership.monthly_rent = monthly_rent
    membership.save(update_fields=['monthly_rent'])

    return membership
