import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ObjectDoesNotExist
from django.db import models


class UserManager(BaseUserManager):
    """Accounts are keyed by email; there is no username."""

    def _build(self, email, password, **fields):
        if not email:
            raise ValueError('Email is required')
        account = self.model(email=self.normalize_email(email), **fields)
        account.set_password(password)
        account.save(using=self._db)
        return account

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._build(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        for flag in ('is_staff', 'is_superuser'):
            if extra_fields.setdefault(flag, True) is not True:
                raise ValueError(f'Superuser must have {flag}=True')
        extra_fields.setdefault('email_verified', True)
        return self._build(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    A person who can sign in and, after onboarding, belong to one mess.

    Mess role and membership live on ``messes.MessMembership``; this model
    only carries identity and contact details.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=32, blank=True)

    email_verified = models.BooleanField(default=False)
    verification_token = models.CharField(max_length=64, blank=True, null=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        # Members who never set a name are shown by their mailbox.
        return self.display_name or self.email.partition('@')[0]

    @property
    def mess_membership(self):
        """The user's membership, or None before onboarding."""
        try:
            return self.membership
        except ObjectDoesNotExist:
            return None
