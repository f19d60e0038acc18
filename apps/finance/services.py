"""
Finance Services Module
=======================

Business logic for the money side of a mess: overhead expenses recorded by
managers, member deposits, grocery runs, the shared shopping list and rent
collection.

Classes:
    ExpenseService: Records expenses and divides overhead across members.
    DepositService: Records deposits and totals them per category.
    GroceryService: Records grocery purchases together with their expense.
    ShoppingListService: Items the mess still has to buy.
    RentService: Rent due versus rent deposits for a month.

Example:
    Recording a grocery run::

        from apps.finance.services import GroceryService
        from decimal import Decimal

        purchase = GroceryService.record_purchase(
            mess_id=mess.id,
            user=request.user,
            items='Rice 5kg, eggs, onions',
            total_cost=Decimal('850.00'),
        )

        # The purchase is backed by a grocery expense paid by the buyer,
        # which credits the buyer in the monthly settlement.
        print(purchase.expense.category)  # 'grocery'
"""

import logging
from collections import defaultdict
from decimal import Decimal

from django.db import transaction
from django.db.models import Count, Sum
from django.utils import timezone

from apps.messes.models import Mess, MessMembership
from apps.settlement.periods import Period
from apps.settlement.records import OVERHEAD_CATEGORIES
from .exceptions import (
    NotInMessError,
    InsufficientPermissionsError,
    MemberNotFoundError,
    InvalidAmountError,
    ShoppingItemNotFoundError,
    ItemAlreadyBoughtError,
)
from .models import (
    Expense,
    ExpenseCategory,
    Deposit,
    GroceryPurchase,
    ShoppingItem,
    ShoppingItemStatus,
    RENT_CATEGORY,
)

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


def _get_mess(mess_id, user):
    try:
        mess = Mess.objects.get(id=mess_id)
    except Mess.DoesNotExist:
        raise NotInMessError(f"Mess {mess_id} not found")
    if not mess.has_member(user):
        raise NotInMessError("You are not a member of this mess")
    return mess


def _get_managed_mess(mess_id, user, action):
    mess = _get_mess(mess_id, user)
    if not mess.is_manager(user):
        logger.warning("User %s tried to %s in mess %s", user.id, action, mess.id)
        raise InsufficientPermissionsError(f"Only managers can {action}")
    return mess


def _get_member(mess, user_id):
    membership = MessMembership.objects.filter(
        mess=mess, user_id=user_id
    ).select_related('user').first()
    if membership is None:
        raise MemberNotFoundError(f"User {user_id} is not a member of this mess")
    return membership


def _positive(amount):
    if amount is None or amount <= 0:
        raise InvalidAmountError("Amount must be greater than zero")
    return amount


class ExpenseService:
    """
    Service for mess expenses.

    Managers record overhead (rent, gas, internet, a cleaner's salary...)
    which is paid from the mess fund unless a paying member is named.
    Grocery expenses are normally created through GroceryService instead.
    """

    @staticmethod
    @transaction.atomic
    def record_expense(
        mess_id,
        recorded_by,
        title,
        amount,
        category=ExpenseCategory.UTILITY,
        paid_by_id=None,
        date=None,
        note='',
    ):
        """
        Record an expense for the mess (manager only).

        Args:
            mess_id (str): The mess code.
            recorded_by (User): Manager recording the expense.
            title (str): Short description, required.
            amount (Decimal): Positive amount.
            category (str, optional): One of ExpenseCategory.
                Defaults to utility.
            paid_by_id (UUID, optional): Member who paid. None means the
                mess fund paid. Defaults to None.
            date (date, optional): Expense date. Defaults to today.
            note (str, optional): Free text.

        Returns:
            Expense: The created expense.

        Raises:
            NotInMessError: If recorded_by is not in the mess.
            InsufficientPermissionsError: If recorded_by is not a manager.
            MemberNotFoundError: If the payer is not in the mess.
            InvalidAmountError: If amount is not positive.
            ValueError: If title is blank.
        """
        mess = _get_managed_mess(mess_id, recorded_by, 'record expenses')
        _positive(amount)
        if not title or not title.strip():
            raise ValueError("Title is required")

        paid_by = _get_member(mess, paid_by_id).user if paid_by_id else None

        expense = Expense.objects.create(
            mess=mess,
            title=title.strip(),
            amount=amount,
            category=category,
            paid_by=paid_by,
            recorded_by=recorded_by,
            date=date or timezone.localdate(),
            note=note,
        )

        logger.info(
            "Expense %s recorded in mess %s: %s %s paid by %s",
            expense.id, mess.id, expense.amount, expense.category, expense.payer
        )
        return expense

    @staticmethod
    def list_expenses(mess_id, period, category=None):
        """Expenses of one month, newest first, optionally of one category."""
        queryset = Expense.objects.filter(
            mess_id=mess_id,
            date__range=(period.start, period.end),
        ).select_related('paid_by', 'recorded_by')
        if category:
            queryset = queryset.filter(category=category)
        return queryset

    @staticmethod
    def overhead_summary(mess_id, period):
        """
        Divide the month's overhead expenses evenly across members.

        Returns:
            dict: A dictionary containing:
                - period (str): YYYY-MM.
                - member_count (int): Current number of members.
                - total (Decimal): All overhead for the month.
                - per_member (Decimal): total / member_count.
                - categories (list[dict]): category, total and per_member
                  for each overhead category.
        """
        member_count = MessMembership.objects.filter(mess_id=mess_id).count()
        rows = Expense.objects.filter(
            mess_id=mess_id,
            date__range=(period.start, period.end),
            category__in=OVERHEAD_CATEGORIES,
        ).values('category').annotate(total=Sum('amount'))
        totals = {row['category']: row['total'] for row in rows}

        def share(amount):
            return amount / member_count if member_count else ZERO

        categories = []
        for category in OVERHEAD_CATEGORIES:
            total = totals.get(category, ZERO)
            categories.append({
                'category': category,
                'total': total,
                'per_member': share(total),
            })

        total = sum((c['total'] for c in categories), ZERO)
        return {
            'period': str(period),
            'member_count': member_count,
            'total': total,
            'per_member': share(total),
            'categories': categories,
        }


class DepositService:
    """
    Service for member deposits.

    Deposits are append-only. Only managers record them, on behalf of the
    member who handed over the money.
    """

    @staticmethod
    @transaction.atomic
    def record_deposit(
        mess_id,
        recorded_by,
        user_id,
        amount,
        category='general',
        rent_month='',
        date=None,
        note='',
    ):
        """
        Record a deposit for a member (manager only).

        A rent deposit with no rent_month pays for the month it is recorded in.

        Raises:
            InsufficientPermissionsError: If recorded_by is not a manager.
            MemberNotFoundError: If user_id is not in the mess.
            InvalidAmountError: If amount is not positive.
        """
        mess = _get_managed_mess(mess_id, recorded_by, 'record deposits')
        _positive(amount)
        member = _get_member(mess, user_id)
        date = date or timezone.localdate()

        category = (category or 'general').strip().lower()
        if category == RENT_CATEGORY and not rent_month:
            rent_month = str(Period.containing(date))
        elif category != RENT_CATEGORY:
            rent_month = ''

        deposit = Deposit.objects.create(
            mess=mess,
            user=member.user,
            amount=amount,
            category=category,
            rent_month=rent_month,
            recorded_by=recorded_by,
            date=date,
            note=note,
        )

        logger.info(
            "Deposit %s recorded in mess %s: %s %s for user %s",
            deposit.id, mess.id, deposit.amount, deposit.category, member.user_id
        )
        return deposit

    @staticmethod
    def list_deposits(mess_id, period, user_id=None):
        queryset = Deposit.objects.filter(
            mess_id=mess_id,
            date__range=(period.start, period.end),
        ).select_related('user', 'recorded_by')
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        return queryset

    @staticmethod
    def deposit_summary(mess_id, period):
        """
        Deposit totals for a month.

        Returns:
            dict: A dictionary containing:
                - period (str): YYYY-MM.
                - total (Decimal): Everything deposited.
                - by_category (dict[str, Decimal]): Mess totals per category.
                - members (list[dict]): user_id, display_name, total and
                  by_category for every current member.
        """
        rows = Deposit.objects.filter(
            mess_id=mess_id,
            date__range=(period.start, period.end),
        ).values('user_id', 'category').annotate(total=Sum('amount'))

        by_category = defaultdict(lambda: ZERO)
        by_member = defaultdict(lambda: defaultdict(lambda: ZERO))
        for row in rows:
            by_category[row['category']] += row['total']
            by_member[row['user_id']][row['category']] += row['total']

        members = []
        memberships = MessMembership.objects.filter(
            mess_id=mess_id
        ).select_related('user').order_by('role', 'user__display_name')
        for membership in memberships:
            categories = by_member.get(membership.user_id, {})
            members.append({
                'user_id': membership.user_id,
                'display_name': membership.user.get_display_name(),
                'total': sum(categories.values(), ZERO),
                'by_category': dict(categories),
            })

        return {
            'period': str(period),
            'total': sum(by_category.values(), ZERO),
            'by_category': dict(by_category),
            'members': members,
        }


class GroceryService:
    """
    Service for grocery purchases.

    A grocery purchase always comes with a grocery-category Expense paid by
    the buyer. Both rows are written in one transaction, so a purchase is
    never recorded without the expense that credits its buyer.
    """

    @staticmethod
    @transaction.atomic
    def record_purchase(mess_id, user, items, total_cost, date=None):
        """
        Record a grocery run made by ``user`` for the mess.

        Args:
            mess_id (str): The mess code.
            user (User): The member who bought the groceries.
            items (str): What was bought.
            total_cost (Decimal): Positive total.
            date (date, optional): Purchase date. Defaults to today.

        Returns:
            GroceryPurchase: The purchase with its expense attached.

        Raises:
            NotInMessError: If user is not in the mess.
            InvalidAmountError: If total_cost is not positive.
        """
        mess = _get_mess(mess_id, user)
        _positive(total_cost)
        items = (items or '').strip()
        if not items:
            raise ValueError("Items are required")
        date = date or timezone.localdate()

        expense = Expense.objects.create(
            mess=mess,
            title=f"Grocery: {items[:180]}",
            amount=total_cost,
            category=ExpenseCategory.GROCERY,
            paid_by=user,
            recorded_by=user,
            date=date,
        )
        purchase = GroceryPurchase.objects.create(
            mess=mess,
            bought_by=user,
            expense=expense,
            items=items,
            total_cost=total_cost,
            date=date,
        )

        logger.info(
            "Grocery purchase %s recorded in mess %s by %s: %s",
            purchase.id, mess.id, user.id, total_cost
        )
        return purchase

    @staticmethod
    def purchase_history(mess_id, user, period=None):
        """Managers see every purchase, members only their own."""
        mess = _get_mess(mess_id, user)
        queryset = GroceryPurchase.objects.filter(mess=mess).select_related('bought_by')
        if not mess.is_manager(user):
            queryset = queryset.filter(bought_by=user)
        if period is not None:
            queryset = queryset.filter(date__range=(period.start, period.end))
        return queryset

    @staticmethod
    def spent_summary(mess_id, period):
        """Grocery spending per buyer for a month, biggest spender first."""
        rows = GroceryPurchase.objects.filter(
            mess_id=mess_id,
            date__range=(period.start, period.end),
        ).values(
            'bought_by_id', 'bought_by__display_name', 'bought_by__email'
        ).annotate(
            total=Sum('total_cost'),
            purchases=Count('id'),
        ).order_by('-total')

        return [
            {
                'user_id': row['bought_by_id'],
                'display_name': row['bought_by__display_name'] or row['bought_by__email'].split('@')[0],
                'total': row['total'],
                'purchases': row['purchases'],
            }
            for row in rows
        ]


class ShoppingListService:
    """Shared list of things to buy. Any member may add or tick off items."""

    @staticmethod
    def add_item(mess_id, user, name, quantity=''):
        mess = _get_mess(mess_id, user)
        item = ShoppingItem.objects.create(
            mess=mess,
            name=name.strip(),
            quantity=(quantity or '').strip(),
            added_by=user,
        )
        logger.info("Shopping item %s added to mess %s", item.id, mess.id)
        return item

    @staticmethod
    def pending_items(mess_id):
        return ShoppingItem.objects.filter(
            mess_id=mess_id,
            status=ShoppingItemStatus.PENDING,
        ).select_related('added_by')

    @staticmethod
    @transaction.atomic
    def mark_bought(item_id, user):
        """
        Tick an item off the list.

        Raises:
            ShoppingItemNotFoundError: If the item is not in the user's mess.
            ItemAlreadyBoughtError: If someone already bought it.
        """
        membership = user.mess_membership
        try:
            item = ShoppingItem.objects.select_for_update().get(
                id=item_id,
                mess_id=membership.mess_id if membership else None,
            )
        except ShoppingItem.DoesNotExist:
            raise ShoppingItemNotFoundError(f"Shopping item {item_id} not found")

        if item.status == ShoppingItemStatus.BOUGHT:
            raise ItemAlreadyBoughtError("Item is already marked as bought")

        item.status = ShoppingItemStatus.BOUGHT
        item.bought_by = user
        item.bought_at = timezone.now()
        item.save(update_fields=['status', 'bought_by', 'bought_at'])
        return item


class RentService:
    """
    Rent collection for a month.

    Rent due comes from each membership's monthly_rent; rent paid is the sum
    of that member's ``rent`` deposits whose rent_month is the month asked for.
    """

    @staticmethod
    def rent_status(membership, period, payments=None):
        """
        Rent position of one member.

        Returns:
            dict: user_id, display_name, rent, paid, remaining (never below
            zero), is_fully_paid and the matching payments.
        """
        if payments is None:
            payments = list(Deposit.objects.filter(
                mess_id=membership.mess_id,
                user_id=membership.user_id,
                category=RENT_CATEGORY,
                rent_month=str(period),
            ))
        paid = sum((p.amount for p in payments), ZERO)
        rent = membership.monthly_rent
        return {
            'user_id': membership.user_id,
            'display_name': membership.user.get_display_name(),
            'rent': rent,
            'paid': paid,
            'remaining': max(rent - paid, ZERO),
            'is_fully_paid': paid >= rent,
            'payments': payments,
        }

    @staticmethod
    def rent_summary(mess_id, period):
        """
        Rent collection across the mess.

        collection_rate is the percentage of total rent collected, 0 when no
        rent is set for anyone.
        """
        payments = defaultdict(list)
        for deposit in Deposit.objects.filter(
            mess_id=mess_id, category=RENT_CATEGORY, rent_month=str(period)
        ):
            payments[deposit.user_id].append(deposit)

        memberships = MessMembership.objects.filter(
            mess_id=mess_id
        ).select_related('user').order_by('role', 'user__display_name')
        members = [
            RentService.rent_status(m, period, payments.get(m.user_id, []))
            for m in memberships
        ]

        total_rent = sum((m['rent'] for m in members), ZERO)
        total_paid = sum((m['paid'] for m in members), ZERO)
        collection_rate = total_paid / total_rent * 100 if total_rent > 0 else ZERO

        return {
            'period': str(period),
            'total_rent': total_rent,
            'total_paid': total_paid,
            'total_remaining': sum((m['remaining'] for m in members), ZERO),
            'collection_rate': collection_rate,
            'members': members,
        }
