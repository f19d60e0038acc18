import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.messes.models import Mess, MessMembership, MessRole


def client_for(user):
    """Return a fresh API client authenticated as user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def manager_user(db):
    """Create and return the mess manager."""
    return User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        display_name='Rahim Manager',
        email_verified=True,
    )


@pytest.fixture
def member_user(db):
    """Create and return a regular member."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Karim Member',
        email_verified=True,
    )


@pytest.fixture
def outsider_user(db):
    """Create and return a user not in any mess."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Outsider',
        email_verified=True,
    )


@pytest.fixture
def manager_client(manager_user):
    return client_for(manager_user)


@pytest.fixture
def member_client(member_user):
    return client_for(member_user)


@pytest.fixture
def outsider_client(outsider_user):
    return client_for(outsider_user)


@pytest.fixture
def mess(db, manager_user):
    """Create a mess with its manager membership."""
    mess = Mess.objects.create(id='MESS01', name='Dhanmondi Mess', manager=manager_user)
    MessMembership.objects.create(user=manager_user, mess=mess, role=MessRole.MANAGER)
    return mess


@pytest.fixture
def mess_with_member(mess, member_user):
    """Mess with a manager and one member paying rent."""
    MessMembership.objects.create(
        user=member_user,
        mess=mess,
        role=MessRole.MEMBER,
        monthly_rent=Decimal('3000.00'),
    )
    return mess
