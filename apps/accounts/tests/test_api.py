import uuid

import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.messes.services import create_mess

PASSWORD = 'MessPass123!'


def _signup(email='nadia@example.com', **overrides):
    payload = {'email': email, 'password': PASSWORD, 'password_confirm': PASSWORD}
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestRegister:
    url_name = 'accounts:register'

    def test_returns_tokens_and_unverified_account(self, api_client):
        response = api_client.post(reverse(self.url_name), _signup(display_name='Nadia'))

        assert response.status_code == status.HTTP_201_CREATED
        assert set(response.data['tokens']) == {'access', 'refresh'}
        assert response.data['user']['display_name'] == 'Nadia'
        account = User.objects.get(email='nadia@example.com')
        assert account.email_verified is False
        assert account.verification_token

    def test_display_name_is_optional(self, api_client):
        response = api_client.post(reverse(self.url_name), _signup())

        assert response.status_code == status.HTTP_201_CREATED

    def test_taken_email(self, api_client, resident):
        response = api_client.post(reverse(self.url_name), _signup(email=resident.email))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already exists' in response.data['error']

    @pytest.mark.parametrize('overrides,field', [
        ({'password_confirm': 'Different123!'}, 'password_confirm'),
        ({'password': '123', 'password_confirm': '123'}, 'password'),
        ({'email': 'not-an-email'}, 'email'),
    ])
    def test_rejected_payloads(self, api_client, overrides, field):
        response = api_client.post(reverse(self.url_name), _signup(**overrides))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in response.data


@pytest.mark.django_db
class TestLogin:
    url_name = 'accounts:login'

    def test_success(self, api_client, resident):
        response = api_client.post(reverse(self.url_name), {'email': resident.email, 'password': PASSWORD})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == resident.email
        assert 'access' in response.data['tokens']
        resident.refresh_from_db()
        assert resident.last_login is not None

    @pytest.mark.parametrize('email,password', [
        ('rahim@example.com', 'Wrong123!'),
        ('nobody@example.com', PASSWORD),
    ])
    def test_bad_credentials_are_401(self, api_client, resident, email, password):
        response = api_client.post(reverse(self.url_name), {'email': email, 'password': password})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid credentials'

    def test_deactivated_account_is_403(self, api_client, deactivated_resident):
        response = api_client.post(
            reverse(self.url_name), {'email': deactivated_resident.email, 'password': PASSWORD}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestLogout:
    url_name = 'accounts:logout'

    def test_without_refresh_token(self, resident_client):
        response = resident_client.post(reverse(self.url_name), {})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Logged out'

    def test_with_refresh_token(self, resident_client, resident):
        response = resident_client.post(reverse(self.url_name), {'refresh': str(RefreshToken.for_user(resident))})

        assert response.status_code == status.HTTP_200_OK

    def test_garbage_refresh_token(self, resident_client):
        response = resident_client.post(reverse(self.url_name), {'refresh': 'not-a-token'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_anonymous(self, api_client):
        assert api_client.post(reverse(self.url_name)).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMe:
    url_name = 'accounts:me'

    def test_session_before_onboarding(self, resident_client, resident):
        response = resident_client.get(reverse(self.url_name))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['session'] == {
            'uid': str(resident.id),
            'email': resident.email,
            'display_name': 'Rahim',
            'role': None,
            'mess_id': None,
        }

    def test_session_after_creating_a_mess(self, resident_client, resident):
        mess = create_mess(name='Green House', user=resident)

        session = resident_client.get(reverse(self.url_name)).data['session']

        assert session['role'] == 'manager'
        assert session['mess_id'] == mess.id

    def test_anonymous(self, api_client):
        assert api_client.get(reverse(self.url_name)).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestProfile:
    url_name = 'accounts:profile'

    def test_rename(self, resident_client, resident):
        response = resident_client.patch(reverse(self.url_name), {'display_name': 'Rahim Uddin'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display_name'] == 'Rahim Uddin'

    def test_phone_only(self, resident_client, resident):
        resident_client.patch(reverse(self.url_name), {'phone': '+8801700000000'})

        resident.refresh_from_db()
        assert resident.phone == '+8801700000000'
        assert resident.display_name == 'Rahim'

    def test_email_is_not_editable(self, resident_client, resident):
        resident_client.patch(reverse(self.url_name), {'email': 'moved@example.com'})

        resident.refresh_from_db()
        assert resident.email == 'rahim@example.com'

    def test_anonymous(self, api_client):
        response = api_client.patch(reverse(self.url_name), {'display_name': 'Nope'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMemberDetail:

    def test_other_account(self, resident_client, housemate):
        response = resident_client.get(reverse('accounts:member-detail', args=[housemate.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display_name'] == 'Karim'

    def test_unknown_id(self, resident_client):
        response = resident_client.get(reverse('accounts:member-detail', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_deactivated_accounts_are_hidden(self, resident_client, deactivated_resident):
        url = reverse('accounts:member-detail', args=[deactivated_resident.id])

        assert resident_client.get(url).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestVerifyEmail:
    url_name = 'accounts:verify-email'

    def test_confirms_the_callers_email(self, client_for, pending_resident):
        response = client_for(pending_resident).post(reverse(self.url_name), {'token': 'confirm-me-please'})

        assert response.status_code == status.HTTP_200_OK
        pending_resident.refresh_from_db()
        assert pending_resident.email_verified is True

    def test_wrong_token(self, resident_client):
        response = resident_client.post(reverse(self.url_name), {'token': 'guess'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_anonymous(self, api_client):
        response = api_client.post(reverse(self.url_name), {'token': 'confirm-me-please'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUserModel:

    def test_superuser_flags(self):
        admin = User.objects.create_superuser(email='admin@example.com', password=PASSWORD)

        assert admin.is_staff and admin.is_superuser
        assert admin.email_verified is True

    def test_superuser_must_be_staff(self):
        with pytest.raises(ValueError):
            User.objects.create_superuser(email='x@example.com', password=PASSWORD, is_staff=False)

    def test_email_is_required(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password=PASSWORD)

    def test_display_name_falls_back_to_mailbox(self, resident):
        resident.display_name = ''

        assert resident.get_display_name() == 'rahim'
        assert str(resident) == 'rahim@example.com'
