"""
Role management service.

Handles member role updates with concurrency protection.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.messes.models import Mess, MessMembership, MessRole

from .exceptions import (
    MessNotFoundError,
    NotMemberError,
    CannotChangeOwnRoleError,
    LastManagerError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def update_member_role(
    *,
    mess_id: str,
    user_id: UUID,
    new_role: str,
    updated_by: User
) -> MessMembership:
    """
    Update a member's role (manager only).

    Manager memberships are locked while checking, so two concurrent
    demotions cannot leave the mess without a manager.

    Args:
        mess_id: Code of the mess
        user_id: UUID of the user whose role to update
        new_role: New role ('manager' or 'member')
        updated_by: User performing the update (must be a manager)

    Returns:
        Updated MessMembership instance

    Raises:
        MessNotFoundError: If mess doesn't exist
        InsufficientPermissionsError: If updated_by is not a manager
        NotMemberError: If target user is not a member
        LastManagerError: If the change would leave no manager
        CannotChangeOwnRoleError: If a manager targets their own membership
        ValueError: If new_role is invalid
    """
    if new_role not in MessRole.values:
        raise ValueError(f"Invalid role. Must be one of: {MessRole.values}")

    try:
        mess = Mess.objects.get(id=mess_id)
    except Mess.DoesNotExist:
        raise MessNotFoundError(f"Mess {mess_id} not found")

    if not mess.is_manager(updated_by):
        logger.warning("User %s tried to change roles in mess %s", updated_by.id, mess_id)
        raise InsufficientPermissionsError("Only managers can update member roles")

    managers = list(
        MessMembership.objects
        .select_for_update()
        .filter(mess=mess, role=MessRole.MANAGER)
    )

    try:
        membership = (
            MessMembership.objects
            .select_for_update()
            .get(mess=mess, user_id=user_id)
        )
    except MessMembership.DoesNotExist:
        raise NotMemberError("User is not a member of this mess")

    if membership.is_manager and new_role != MessRole.MANAGER and len(managers) <= 1:
        raise LastManagerError("A mess must keep at least one manager")

    if str(updated_by.id) == str(user_id):
        raise CannotChangeOwnRoleError("You cannot change your own role")

    if membership.role != new_role:
        membership.role = new_role
        membership.save(update_fields=['role'])
        logger.info(
            "User %s is now %s in mess %s (changed by %s)",
            user_id, new_role, mess.id, updated_by.id,
        )

    return membership
