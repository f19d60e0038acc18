import pytest

from apps.accounts.models import User
from apps.accounts.services import (
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserRegistrationError,
    authenticate_user,
    register_user,
    update_profile,
    verify_user_email,
)

PASSWORD = 'MessPass123!'
CONFIRM_TOKEN = 'confirm-me-please'


@pytest.mark.django_db
class TestRegisterUser:

    def test_new_account_gets_confirmation_token(self):
        account = register_user(email='Nadia@Example.COM', password=PASSWORD, display_name='Nadia')

        assert account.check_password(PASSWORD)
        assert account.email == 'Nadia@example.com'
        assert account.email_verified is False
        assert len(account.verification_token) > 20
        assert account.mess_membership is None

    def test_taken_email_is_rejected(self, resident):
        with pytest.raises(UserRegistrationError):
            register_user(email=resident.email, password=PASSWORD)

        assert User.objects.filter(email=resident.email).count() == 1


@pytest.mark.django_db
class TestAuthenticateUser:

    def test_stamps_last_login(self, resident):
        account = authenticate_user(email=resident.email, password=PASSWORD)

        assert account == resident
        assert account.last_login is not None

    @pytest.mark.parametrize('email,password', [
        ('rahim@example.com', 'wrong-password'),
        ('nobody@example.com', PASSWORD),
    ])
    def test_bad_pairs_share_one_error(self, resident, email, password):
        with pytest.raises(InvalidCredentialsError, match='Invalid email or password'):
            authenticate_user(email=email, password=password)

    def test_deactivated_account(self, deactivated_resident):
        with pytest.raises(InactiveAccountError):
            authenticate_user(email=deactivated_resident.email, password=PASSWORD)

    def test_deactivated_account_with_wrong_password_looks_like_bad_login(self, deactivated_resident):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email=deactivated_resident.email, password='wrong-password')


@pytest.mark.django_db
class TestVerifyUserEmail:

    def test_confirms_and_clears_token(self, pending_resident):
        account = verify_user_email(user_id=pending_resident.id, token=CONFIRM_TOKEN)

        assert account.email_verified is True
        assert account.verification_token is None

    def test_token_is_single_use(self, pending_resident):
        verify_user_email(user_id=pending_resident.id, token=CONFIRM_TOKEN)

        with pytest.raises(InvalidTokenError):
            verify_user_email(user_id=pending_resident.id, token=CONFIRM_TOKEN)

    def test_blank_token_never_matches_a_verified_account(self, resident):
        with pytest.raises(InvalidTokenError):
            verify_user_email(user_id=resident.id, token='')


@pytest.mark.django_db
def test_update_profile_leaves_other_fields_alone(resident):
    update_profile(user=resident, phone='01711111111')

    resident.refresh_from_db()
    assert resident.phone == '01711111111'
    assert resident.display_name == 'Rahim'
