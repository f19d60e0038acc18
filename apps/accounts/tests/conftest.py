import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User

PASSWORD = 'MessPass123!'
CONFIRM_TOKEN = 'confirm-me-please'


def _account(email, name, **extra):
    return User.objects.create_user(email=email, password=PASSWORD, display_name=name, **extra)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def resident(db):
    """A verified account that has not joined a mess yet."""
    return _account('rahim@example.com', 'Rahim', email_verified=True)


@pytest.fixture
def housemate(db):
    return _account('karim@example.com', 'Karim', email_verified=True)


@pytest.fixture
def pending_resident(db):
    """Registered but the confirmation email was never used."""
    account = _account('sumon@example.com', 'Sumon')
    account.verification_token = CONFIRM_TOKEN
    account.save(update_fields=['verification_token'])
    return account


@pytest.fixture
def deactivated_resident(db):
    return _account('left@example.com', 'Former Resident', is_active=False)


@pytest.fixture
def client_for(db):
    """Build a JWT-authenticated client for any account."""
    def build(account):
        client = APIClient()
        token = RefreshToken.for_user(account).access_token
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        return client
    return build


@pytest.fixture
def resident_client(client_for, resident):
    return client_for(resident)
