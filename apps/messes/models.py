# ==========================================
# apps/messes/models.py
# ==========================================

import secrets
import string
import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

JOIN_CODE_LENGTH = 6
JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_join_code():
    return ''.join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH))


def default_currency():
    return settings.MESSMATE_CURRENCY


class MessRole(models.TextChoices):
    MANAGER = 'manager', 'Manager'
    MEMBER = 'member', 'Member'


class Mess(models.Model):
    """A shared household. Its primary key doubles as the join code."""

    id = models.CharField(primary_key=True, max_length=JOIN_CODE_LENGTH, editable=False)
    name = models.CharField(max_length=200)
    manager = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_messes',
    )
    currency = models.CharField(max_length=3, default=default_currency)
    # Kept for old clients; the meal rate is always recomputed
    legacy_meal_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'messes'
        verbose_name_plural = 'messes'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.id})"

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return self.memberships.get(user=user).role
        except MessMembership.DoesNotExist:
            return None

    def is_manager(self, user):
        return self.get_user_role(user) == MessRole.MANAGER

    def manager_count(self):
        return self.memberships.filter(role=MessRole.MANAGER).count()


class MessMembership(models.Model):
    """A user's place in a mess. A user belongs to at most one mess."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='membership')
    mess = models.ForeignKey(Mess, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=MessRole.choices, default=MessRole.MEMBER)
    monthly_rent = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'mess_memberships'
        indexes = [
            models.Index(fields=['mess', 'role'], name='mess_member_role_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.mess.name} ({self.role})"

    @property
    def is_manager(self):
        return self.role == MessRole.MANAGER
