"""
Monthly meal rate and per-member settlement.

Everything here is a pure function of the typed records for one mess and
one month, with no database or settings access. Amounts stay exact
Decimals throughout; ``round_money`` is for presentation only.

Balance of a member = credit - meal cost, where

    meal rate  = (grocery + meal expenses) / total meal units
    meal cost  = member meal units * meal rate
    credit     = member deposits + grocery/meal expenses the member paid

Utility expenses (every overhead category: utility, others, general) a
member paid are reported as ``utility_paid`` but are not part of the
credit, and the even utility share is reported but not part of the
balance. Balances therefore do not sum to zero in general.
"""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Sequence, Tuple

from .records import (
    MEAL_COST_CATEGORIES,
    UTILITY_CATEGORIES,
    DepositEntry,
    ExpenseEntry,
    MealEntry,
    MemberRecord,
)

ZERO = Decimal('0')
CENT = Decimal('0.01')


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half up. Display only."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def meal_counts(meals: Iterable[MealEntry]) -> Dict[str, int]:
    counts: Dict[str, int] = defaultdict(int)
    for meal in meals:
        counts[meal.user_id] += meal.units
    return dict(counts)


def meal_rate(eligible_total: Decimal, total_meals: int, fallback: Decimal = ZERO) -> Decimal:
    """Cost of one meal unit; ``fallback`` when nobody ate this month."""
    if total_meals <= 0:
        return fallback
    return eligible_total / total_meals


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


@dataclass(frozen=True)
class MemberBalance:
    uid: str
    display_name: str
    role: str
    meal_count: int
    deposits: Decimal
    meal_expenses_paid: Decimal
    utility_paid: Decimal
    credit: Decimal
    meal_cost: Decimal
    utility_share: Decimal
    balance: Decimal

    @property
    def status(self) -> str:
        rounded = round_money(self.balance)
        if rounded > 0:
            return 'receivable'
        if rounded < 0:
            return 'payable'
        return 'settled'


@dataclass(frozen=True)
class MonthStats:
    total_meals: int
    meal_cost_total: Decimal
    total_deposits: Decimal
    utility_total: Decimal
    utility_share: Decimal
    meal_rate: Decimal
    members: Tuple[MemberBalance, ...]

    def member(self, uid) -> Optional[MemberBalance]:
        uid = str(uid)
        for balance in self.members:
            if balance.uid == uid:
                return balance
        return None

    @property
    def balance_total(self) -> Decimal:
        return _sum(m.balance for m in self.members)


@dataclass(frozen=True)
class MemberDetail:
    balance: MemberBalance
    deposits: Tuple[DepositEntry, ...]
    meal_expenses: Tuple[ExpenseEntry, ...]
    utility_expenses: Tuple[ExpenseEntry, ...]


@dataclass(frozen=True)
class BalanceSheet:
    stats: MonthStats
    details: Tuple[MemberDetail, ...]


def compute_stats(
    *,
    members: Sequence[MemberRecord],
    meals: Sequence[MealEntry],
    expenses: Sequence[ExpenseEntry],
    deposits: Sequence[DepositEntry],
    no_meal_rate: Decimal = ZERO,
) -> Optional[MonthStats]:
    """
    Compute the month's meal rate and every member's balance.

    Returns None when the mess has no members. Meals of users who are no
    longer members still count toward the mess total, so they still
    dilute the meal rate.
    """
    if not members:
        return None

    counts = meal_counts(meals)
    total_meals = sum(counts.values())

    meal_cost_total = _sum(e.amount for e in expenses if e.category in MEAL_COST_CATEGORIES)
    utility_total = _sum(e.amount for e in expenses if e.category in UTILITY_CATEGORIES)
    utility_share = utility_total / len(members)
    rate = meal_rate(meal_cost_total, total_meals, no_meal_rate)

    deposited: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for deposit in deposits:
        deposited[deposit.user_id] += deposit.amount

    meal_paid: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    utility_paid: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        if expense.paid_from_fund:
            continue
        if expense.category in MEAL_COST_CATEGORIES:
            meal_paid[expense.paid_by] += expense.amount
        elif expense.category in UTILITY_CATEGORIES:
            utility_paid[expense.paid_by] += expense.amount

    balances = []
    for member in members:
        count = counts.get(member.uid, 0)
        credit = deposited[member.uid] + meal_paid[member.uid]
        cost = count * rate
        balances.append(MemberBalance(
            uid=member.uid,
            display_name=member.display_name,
            role=member.role,
            meal_count=count,
            deposits=deposited[member.uid],
            meal_expenses_paid=meal_paid[member.uid],
            utility_paid=utility_paid[member.uid],
            credit=credit,
            meal_cost=cost,
            utility_share=utility_share,
            balance=credit - cost,
        ))

    return MonthStats(
        total_meals=total_meals,
        meal_cost_total=meal_cost_total,
        total_deposits=_sum(d.amount for d in deposits),
        utility_total=utility_total,
        utility_share=utility_share,
        meal_rate=rate,
        members=tuple(balances),
    )


def compute_balance_sheet(
    *,
    members: Sequence[MemberRecord],
    meals: Sequence[MealEntry],
    expenses: Sequence[ExpenseEntry],
    deposits: Sequence[DepositEntry],
    no_meal_rate: Decimal = ZERO,
) -> Optional[BalanceSheet]:
    """Stats plus the entries behind each member's numbers."""
    stats = compute_stats(
        members=members,
        meals=meals,
        expenses=expenses,
        deposits=deposits,
        no_meal_rate=no_meal_rate,
    )
    if stats is None:
        return None

    details = []
    for balance in stats.members:
        paid = [e for e in expenses if e.paid_by == balance.uid]
        details.append(MemberDetail(
            balance=balance,
            deposits=tuple(d for d in deposits if d.user_id == balance.uid),
            meal_expenses=tuple(e for e in paid if e.category in MEAL_COST_CATEGORIES),
            utility_expenses=tuple(e for e in paid if e.category in UTILITY_CATEGORIES),
        ))

    return BalanceSheet(stats=stats, details=tuple(details))
