"""
Daily meal tracker.

Builds the table a manager fills in every day: one row per member with that
day's meals, plus month-to-date totals and the month's billing summary.
"""

from datetime import date
from decimal import Decimal

from apps.meals.models import MealRecord
from apps.settlement.periods import Period
from apps.settlement.snapshots import load_month

ZERO = Decimal('0')


def daily_tracker(*, mess_id: str, day: date) -> dict:
    """
    Meal tracker for one day of a mess.

    Returns:
        dict with ``date``, ``period``, ``members`` (managers first, then by
        name) and ``billing`` (total meals, grocery cost, meal rate for the
        month ``day`` falls in).
    """
    period = Period.containing(day)
    snapshot = load_month(mess_id, period)
    stats = snapshot.stats()

    todays = {
        str(record.user_id): record
        for record in MealRecord.objects.filter(mess_id=mess_id, date=day)
    }

    grocery_paid = {}
    for expense in snapshot.expenses:
        if expense.category == 'grocery' and not expense.paid_from_fund:
            grocery_paid[expense.paid_by] = grocery_paid.get(expense.paid_by, ZERO) + expense.amount

    rows = []
    for member in snapshot.members:
        record = todays.get(member.uid)
        balance = stats.member(member.uid) if stats else None
        rows.append({
            'user_id': member.uid,
            'display_name': member.display_name,
            'role': member.role,
            'breakfast': record.breakfast if record else False,
            'lunch': record.lunch if record else False,
            'dinner': record.dinner if record else False,
            'day_meals': record.meal_count if record else 0,
            'monthly_meals': balance.meal_count if balance else 0,
            'monthly_grocery_paid': grocery_paid.get(member.uid, ZERO),
        })

    return {
        'date': day,
        'period': str(period),
        'members': rows,
        'billing': {
            'total_meals': stats.total_meals if stats else 0,
            'grocery_cost': stats.meal_cost_total if stats else ZERO,
            'meal_rate': stats.meal_rate if stats else ZERO,
        },
    }
