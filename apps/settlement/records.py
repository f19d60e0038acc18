"""
Typed, immutable records the calculator works on.

Rows coming out of the database are turned into these records by the
``*_from_row`` functions, which are the only place where field shapes are
checked. A row that does not fit raises MalformedRecordError, so bad data
never turns into a silent zero or a crash halfway through a sum.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from .exceptions import MalformedRecordError

MESS_FUND = 'mess_fund'

EXPENSE_CATEGORIES = frozenset({'grocery', 'utility', 'meal', 'others', 'general'})

# Expenses that make up the meal rate and count as a member's credit
MEAL_COST_CATEGORIES = frozenset({'grocery', 'meal'})

# Non-food expenses split evenly across members (the mess overhead)
OVERHEAD_CATEGORIES = ('utility', 'others', 'general')
UTILITY_CATEGORIES = frozenset(OVERHEAD_CATEGORIES)

ROLES = frozenset({'manager', 'member'})


@dataclass(frozen=True)
class MemberRecord:
    uid: str
    display_name: str
    role: str


@dataclass(frozen=True)
class MealEntry:
    user_id: str
    date: date
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False

    @property
    def units(self) -> int:
        return int(self.breakfast) + int(self.lunch) + int(self.dinner)


@dataclass(frozen=True)
class ExpenseEntry:
    paid_by: str
    amount: Decimal
    category: str
    date: date

    @property
    def paid_from_fund(self) -> bool:
        return self.paid_by == MESS_FUND


@dataclass(frozen=True)
class DepositEntry:
    user_id: str
    amount: Decimal
    category: str
    date: date


def _require(row: Mapping[str, Any], key: str, kind: str):
    value = row.get(key)
    if value is None or value == '':
        raise MalformedRecordError(f"{kind} is missing '{key}': {dict(row)!r}")
    return value


def _amount(row: Mapping[str, Any], kind: str) -> Decimal:
    raw = _require(row, 'amount', kind)
    if isinstance(raw, float):
        raw = str(raw)
    try:
        amount = Decimal(raw)
    except (InvalidOperation, TypeError, ValueError):
        raise MalformedRecordError(f"{kind} has a non-numeric amount: {raw!r}")
    if not amount.is_finite() or amount < 0:
        raise MalformedRecordError(f"{kind} has an invalid amount: {raw!r}")
    return amount


def _day(row: Mapping[str, Any], kind: str) -> date:
    value = _require(row, 'date', kind)
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise MalformedRecordError(f"{kind} has an invalid date: {value!r}")
    if not isinstance(value, date):
        raise MalformedRecordError(f"{kind} has an invalid date: {value!r}")
    return value


def _flag(row: Mapping[str, Any], key: str) -> bool:
    value = row.get(key, False)
    if not isinstance(value, bool):
        raise MalformedRecordError(f"Meal flag '{key}' must be a boolean, got {value!r}")
    return value


def member_from_row(row: Mapping[str, Any]) -> MemberRecord:
    role = _require(row, 'role', 'Member')
    if role not in ROLES:
        raise MalformedRecordError(f"Member has an unknown role: {role!r}")
    return MemberRecord(
        uid=str(_require(row, 'uid', 'Member')),
        display_name=row.get('display_name') or '',
        role=role,
    )


def meal_from_row(row: Mapping[str, Any]) -> MealEntry:
    return MealEntry(
        user_id=str(_require(row, 'user_id', 'Meal')),
        date=_day(row, 'Meal'),
        breakfast=_flag(row, 'breakfast'),
        lunch=_flag(row, 'lunch'),
        dinner=_flag(row, 'dinner'),
    )


def expense_from_row(row: Mapping[str, Any]) -> ExpenseEntry:
    category = _require(row, 'category', 'Expense')
    if category not in EXPENSE_CATEGORIES:
        raise MalformedRecordError(f"Expense has an unknown category: {category!r}")
    paid_by = row.get('paid_by')
    return ExpenseEntry(
        paid_by=str(paid_by) if paid_by else MESS_FUND,
        amount=_amount(row, 'Expense'),
        category=category,
        date=_day(row, 'Expense'),
    )


def deposit_from_row(row: Mapping[str, Any]) -> DepositEntry:
    return DepositEntry(
        user_id=str(_require(row, 'user_id', 'Deposit')),
        amount=_amount(row, 'Deposit'),
        category=row.get('category') or 'general',
        date=_day(row, 'Deposit'),
    )
