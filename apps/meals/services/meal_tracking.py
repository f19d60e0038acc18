"""
Meal tracking service.

A member's meals for a day live in a single MealRecord that is created on
the first toggle and updated in place afterwards.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.meals.models import MealRecord, MealType
from apps.messes.models import Mess, MessMembership
from apps.settlement.periods import Period
from apps.settlement.signals import schedule_publish

from .exceptions import (
    NotInMessError,
    NotMemberError,
    InsufficientPermissionsError,
    InvalidMealTypeError,
)

logger = logging.getLogger(__name__)


def _get_mess_for_actor(*, mess_id: str, actor: User) -> Mess:
    mess = Mess.objects.filter(id=mess_id).first()
    if mess is None or not mess.has_member(actor):
        raise NotInMessError("You are not a member of this mess")
    return mess


@transaction.atomic
def toggle_meal(
    *,
    mess_id: str,
    actor: User,
    user_id: UUID,
    day: date,
    meal_type: str,
    taken: bool
) -> MealRecord:
    """
    Mark one meal of one day as taken or not taken.

    Members may only change their own meals; managers may change the meals
    of anyone in their mess.

    Args:
        mess_id: Mess code
        actor: User making the change
        user_id: Member whose meal changes
        day: Calendar day
        meal_type: breakfast, lunch or dinner
        taken: New value

    Returns:
        The created or updated MealRecord

    Raises:
        NotInMessError: If actor is not in the mess
        InsufficientPermissionsError: If a member targets someone else
        NotMemberError: If user_id is not in the mess
        InvalidMealTypeError: If meal_type is unknown
    """
    if meal_type not in MealType.values:
        raise InvalidMealTypeError(f"Unknown meal type '{meal_type}'")

    mess = _get_mess_for_actor(mess_id=mess_id, actor=actor)

    if str(user_id) != str(actor.id) and not mess.is_manager(actor):
        logger.warning(
            "User %s tried to change meals of %s in mess %s", actor.id, user_id, mess.id
        )
        raise InsufficientPermissionsError("Only managers can change other members' meals")

    if not MessMembership.objects.filter(mess=mess, user_id=user_id).exists():
        raise NotMemberError(f"User {user_id} is not a member of this mess")

    record, created = MealRecord.objects.select_for_update().get_or_create(
        user_id=user_id,
        date=day,
        defaults={'mess': mess},
    )
    # One record per user and day; a record left from an earlier mess moves here
    if record.mess_id != mess.id:
        schedule_publish(record.mess_id, Period.containing(day))
        record.mess = mess
    setattr(record, meal_type, taken)
    record.save()

    logger.info(
        "Meal %s on %s for user %s set to %s by %s",
        meal_type, day, user_id, taken, actor.id
    )
    return record


def list_meals(
    *,
    mess_id: str,
    start: date,
    end: date,
    user_id: Optional[UUID] = None
) -> QuerySet[MealRecord]:
    """Meal records of a mess between two days, inclusive."""
    queryset = MealRecord.objects.filter(
        mess_id=mess_id,
        date__range=(start, end),
    ).select_related('user').order_by('date', 'user__display_name')
    if user_id:
        queryset = queryset.filter(user_id=user_id)
    return queryset
