"""Publish recomputed month stats after meal, expense, deposit or membership writes."""

import logging
from datetime import date

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from apps.finance.models import Deposit, Expense
from apps.meals.models import MealRecord
from apps.messes.models import MessMembership

from .feed import SnapshotUpdate, feed
from .periods import Period
from .snapshots import load_month

logger = logging.getLogger(__name__)


def publish_month(mess_id, period: Period) -> None:
    """Recompute one mess month and hand it to its subscribers."""
    if not feed.has_subscribers(mess_id, period):
        return
    try:
        stats = load_month(mess_id, period).stats()
    except Exception:
        # Runs after the triggering write committed; it must not fail that write
        logger.exception("Could not recompute %s %s for the snapshot feed", mess_id, period)
        return
    delivered = feed.publish(SnapshotUpdate(mess_id=mess_id, period=period, stats=stats))
    logger.debug("Published %s %s to %d subscriber(s)", mess_id, period, delivered)


def schedule_publish(mess_id, period: Period) -> None:
    # Subscribers must see committed data
    transaction.on_commit(lambda: publish_month(mess_id, period))


@receiver(post_save, sender=MealRecord)
@receiver(post_delete, sender=MealRecord)
@receiver(post_save, sender=Expense)
@receiver(post_delete, sender=Expense)
@receiver(post_save, sender=Deposit)
@receiver(post_delete, sender=Deposit)
def month_entry_changed(sender, instance, **kwargs):
    day = instance.date
    if isinstance(day, str):
        day = date.fromisoformat(day)
    schedule_publish(instance.mess_id, Period.containing(day))


@receiver(post_save, sender=MessMembership)
@receiver(post_delete, sender=MessMembership)
def membership_changed(sender, instance, **kwargs):
    schedule_publish(instance.mess_id, Period.current())
