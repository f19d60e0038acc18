from django.db import models
from django.core.validators import MinValueValidator, RegexValidator
from decimal import Decimal
import uuid

from apps.settlement.records import MESS_FUND

period_validator = RegexValidator(r'^\d{4}-(0[1-9]|1[0-2])$', 'Use YYYY-MM')


class ExpenseCategory(models.TextChoices):
    GROCERY = 'grocery', 'Grocery'
    UTILITY = 'utility', 'Utility'
    MEAL = 'meal', 'Meal'
    OTHERS = 'others', 'Others'
    GENERAL = 'general', 'General'


# Deposit categories are free-form; these are the ones the app knows a label for
DEPOSIT_CATEGORY_LABELS = {
    'general': 'General deposit',
    'rent': 'Rent',
    'utility_contribution': 'Utility contribution',
    'gas_contribution': 'Gas bill',
    'internet_contribution': 'Internet bill',
    'electricity_contribution': 'Electricity bill',
    'water_contribution': 'Water bill',
    'cleaner_contribution': 'Cleaner salary',
    'other_bills_contribution': 'Other bills',
}

RENT_CATEGORY = 'rent'


class ShoppingItemStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    BOUGHT = 'bought', 'Bought'


class Expense(models.Model):
    """Money spent for the mess, either from the mess fund or by a member."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='expenses')

    title = models.CharField(max_length=200)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    category = models.CharField(
        max_length=20,
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.UTILITY
    )

    # NULL means the mess fund paid
    paid_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses_paid'
    )
    recorded_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses_recorded'
    )

    date = models.DateField()
    note = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['mess', 'date'], name='expense_mess_date_idx'),
            models.Index(fields=['mess', 'category'], name='expense_mess_category_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.title} - {self.amount} ({self.category})"

    @property
    def payer(self):
        """Payer id as text, or the mess fund sentinel."""
        return str(self.paid_by_id) if self.paid_by_id else MESS_FUND


class Deposit(models.Model):
    """Money a member handed to the mess. Append-only."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='deposits')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='deposits')

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    category = models.CharField(max_length=50, default='general')
    # Month a rent deposit pays for, YYYY-MM
    rent_month = models.CharField(max_length=7, blank=True, validators=[period_validator])

    recorded_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='deposits_recorded'
    )
    date = models.DateField()
    note = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'deposits'
        indexes = [
            models.Index(fields=['mess', 'date'], name='deposit_mess_date_idx'),
            models.Index(fields=['mess', 'category', 'rent_month'], name='deposit_mess_rent_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.user.get_display_name()} - {self.amount} ({self.category})"

    @property
    def category_label(self):
        return DEPOSIT_CATEGORY_LABELS.get(self.category, self.category.replace('_', ' ').title())


class GroceryPurchase(models.Model):
    """A member's grocery run. Always paired with a grocery expense."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='grocery_purchases')
    bought_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='grocery_purchases'
    )
    expense = models.OneToOneField(
        Expense,
        on_delete=models.CASCADE,
        related_name='grocery_purchase'
    )

    items = models.TextField()
    total_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'grocery_purchases'
        indexes = [
            models.Index(fields=['mess', 'date'], name='grocery_mess_date_idx'),
            models.Index(fields=['bought_by', 'date'], name='grocery_buyer_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.bought_by.get_display_name()} - {self.total_cost} on {self.date}"


class ShoppingItem(models.Model):
    """Something the mess needs to buy."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='shopping_items')
    name = models.CharField(max_length=200)
    quantity = models.CharField(max_length=50, blank=True)
    status = models.CharField(
        max_length=20,
        choices=ShoppingItemStatus.choices,
        default=ShoppingItemStatus.PENDING
    )
    added_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='shopping_items_added'
    )
    bought_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='shopping_items_bought'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    bought_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'shopping_items'
        indexes = [
            models.Index(fields=['mess', 'status'], name='shopping_mess_status_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.name} ({self.status})"
