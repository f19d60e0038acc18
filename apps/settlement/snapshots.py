"""
Store adapter: loads one mess-month from the database as typed records.

Every row passes through the ``*_from_row`` validators in ``records``, so
the calculator only ever sees well-formed data.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from django.conf import settings

from apps.finance.models import Deposit, Expense
from apps.meals.models import MealRecord
from apps.messes.models import MessMembership

from .calculator import BalanceSheet, MonthStats, compute_balance_sheet, compute_stats
from .periods import Period
from .records import (
    DepositEntry,
    ExpenseEntry,
    MealEntry,
    MemberRecord,
    deposit_from_row,
    expense_from_row,
    meal_from_row,
    member_from_row,
)


def configured_no_meal_rate() -> Decimal:
    return Decimal(str(getattr(settings, 'MESSMATE_NO_MEAL_RATE', 0)))


@dataclass(frozen=True)
class MonthSnapshot:
    mess_id: str
    period: Period
    members: Tuple[MemberRecord, ...]
    meals: Tuple[MealEntry, ...]
    expenses: Tuple[ExpenseEntry, ...]
    deposits: Tuple[DepositEntry, ...]

    def _inputs(self, no_meal_rate):
        return dict(
            members=self.members,
            meals=self.meals,
            expenses=self.expenses,
            deposits=self.deposits,
            no_meal_rate=configured_no_meal_rate() if no_meal_rate is None else no_meal_rate,
        )

    def stats(self, no_meal_rate: Optional[Decimal] = None) -> Optional[MonthStats]:
        return compute_stats(**self._inputs(no_meal_rate))

    def balance_sheet(self, no_meal_rate: Optional[Decimal] = None) -> Optional[BalanceSheet]:
        return compute_balance_sheet(**self._inputs(no_meal_rate))


def load_members(mess_id) -> Tuple[MemberRecord, ...]:
    """Current members, managers first then by name."""
    rows = MessMembership.objects.filter(mess_id=mess_id).order_by(
        'role', 'user__display_name', 'user__email'
    ).values('user_id', 'user__display_name', 'user__email', 'role')
    return tuple(
        member_from_row({
            'uid': row['user_id'],
            'display_name': row['user__display_name'] or row['user__email'].split('@')[0],
            'role': row['role'],
        })
        for row in rows
    )


def load_month(mess_id, period: Period) -> MonthSnapshot:
    """
    Read everything the calculator needs for one mess and month.

    Raises:
        MalformedRecordError: If any stored row fails validation.
    """
    day_range = (period.start, period.end)

    meals = MealRecord.objects.filter(
        mess_id=mess_id, date__range=day_range
    ).values('user_id', 'date', 'breakfast', 'lunch', 'dinner')

    expenses = Expense.objects.filter(
        mess_id=mess_id, date__range=day_range
    ).values('paid_by_id', 'amount', 'category', 'date')

    deposits = Deposit.objects.filter(
        mess_id=mess_id, date__range=day_range
    ).values('user_id', 'amount', 'category', 'date')

    return MonthSnapshot(
        mess_id=mess_id,
        period=period,
        members=load_members(mess_id),
        meals=tuple(meal_from_row(row) for row in meals),
        expenses=tuple(
            expense_from_row({**row, 'paid_by': row['paid_by_id']}) for row in expenses
        ),
        deposits=tuple(deposit_from_row(row) for row in deposits),
    )
