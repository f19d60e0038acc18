import pytest
from datetime import date
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.finance.models import Expense, Deposit, GroceryPurchase, ShoppingItem


# =============================================================================
# Expense API Tests
# =============================================================================

@pytest.mark.django_db
class TestExpenseAPI:
    """Tests for /api/finance/expenses/"""

    def test_manager_records_expense(self, manager_client, mess):
        url = reverse('finance:expense-list')
        response = manager_client.post(url, {
            'title': 'Electricity',
            'amount': '1450.00',
            'date': '2025-01-12',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['paid_by'] == 'mess_fund'
        assert response.data['paid_by_name'] == 'Mess Fund'
        assert response.data['category'] == 'utility'

    def test_member_cannot_record_expense(self, member_client, mess):
        url = reverse('finance:expense-list')
        response = member_client.post(url, {'title': 'Gas', 'amount': '100'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Expense.objects.exists()

    def test_zero_amount_rejected(self, manager_client, mess):
        url = reverse('finance:expense-list')
        response = manager_client.post(url, {'title': 'Gas', 'amount': '0'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data

    def test_payer_outside_mess(self, manager_client, mess, outsider_user):
        url = reverse('finance:expense-list')
        response = manager_client.post(url, {
            'title': 'Gas', 'amount': '100', 'paid_by': str(outsider_user.id),
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_list_expenses_for_month(self, member_client, mess, manager_user):
        Expense.objects.create(
            mess=mess, title='Gas', amount=Decimal('500'), date=date(2025, 1, 3), recorded_by=manager_user
        )
        Expense.objects.create(
            mess=mess, title='Water', amount=Decimal('200'), date=date(2025, 2, 3), recorded_by=manager_user
        )

        url = reverse('finance:expense-list')
        response = member_client.get(url, {'period': '2025-01'})

        assert response.status_code == status.HTTP_200_OK
        assert [e['title'] for e in response.data] == ['Gas']

    def test_other_mess_expense_not_visible(self, outsider_client, mess):
        expense = Expense.objects.create(mess=mess, title='Gas', amount=Decimal('500'), date=date(2025, 1, 3))

        url = reverse('finance:expense-detail', kwargs={'pk': expense.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_overhead(self, member_client, mess):
        Expense.objects.create(mess=mess, title='Gas', amount=Decimal('1001'), date=date(2025, 1, 3))

        url = reverse('finance:expense-overhead')
        response = member_client.get(url, {'period': '2025-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == Decimal('1001.00')
        assert response.data['per_member'] == Decimal('500.50')


# =============================================================================
# Deposit API Tests
# =============================================================================

@pytest.mark.django_db
class TestDepositAPI:
    """Tests for /api/finance/deposits/"""

    def test_manager_records_rent(self, manager_client, mess, member_user):
        url = reverse('finance:deposit-list')
        response = manager_client.post(url, {
            'user_id': str(member_user.id),
            'amount': '3000',
            'category': 'rent',
            'rent_month': '2025-01',
            'date': '2025-01-02',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['rent_month'] == '2025-01'
        assert response.data['category_label'] == 'Rent'

    def test_bad_rent_month(self, manager_client, mess, member_user):
        url = reverse('finance:deposit-list')
        response = manager_client.post(url, {
            'user_id': str(member_user.id), 'amount': '3000', 'category': 'rent', 'rent_month': '2025-1',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'rent_month' in response.data

    def test_member_cannot_record_deposit(self, member_client, mess, member_user):
        url = reverse('finance:deposit-list')
        response = member_client.post(url, {'user_id': str(member_user.id), 'amount': '10'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Deposit.objects.exists()

    def test_list_and_summary(self, member_client, mess, member_user):
        Deposit.objects.create(mess=mess, user=member_user, amount=Decimal('700'), date=date(2025, 1, 2))

        response = member_client.get(reverse('finance:deposit-list'), {'period': '2025-01'})
        assert len(response.data) == 1

        response = member_client.get(reverse('finance:deposit-summary'), {'period': '2025-01'})
        assert response.data['total'] == Decimal('700.00')
        assert response.data['by_category'] == {'general': Decimal('700.00')}


# =============================================================================
# Grocery and Shopping API Tests
# =============================================================================

@pytest.mark.django_db
class TestGroceryAPI:
    """Tests for /api/finance/grocery/"""

    def test_member_records_purchase(self, member_client, mess, member_user):
        url = reverse('finance:grocery-list')
        response = member_client.post(url, {'items': 'Rice, dal', 'total_cost': '640.50'})

        assert response.status_code == status.HTTP_201_CREATED
        purchase = GroceryPurchase.objects.get(id=response.data['id'])
        assert purchase.expense.paid_by == member_user
        assert purchase.expense.category == 'grocery'

    def test_negative_cost_rejected(self, member_client, mess):
        url = reverse('finance:grocery-list')
        response = member_client.post(url, {'items': 'Rice', 'total_cost': '-1'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Expense.objects.exists()

    def test_spent(self, member_client, mess, member_user):
        member_client.post(reverse('finance:grocery-list'), {
            'items': 'Rice', 'total_cost': '100', 'date': '2025-01-05',
        })

        response = member_client.get(reverse('finance:grocery-spent'), {'period': '2025-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['total'] == Decimal('100.00')


@pytest.mark.django_db
class TestShoppingAPI:
    """Tests for /api/finance/shopping/"""

    def test_add_and_mark_bought(self, member_client, manager_client, mess):
        response = member_client.post(reverse('finance:shopping-list'), {'name': 'Eggs', 'quantity': '12'})
        assert response.status_code == status.HTTP_201_CREATED
        item_id = response.data['id']

        response = manager_client.post(reverse('finance:shopping-mark-bought', kwargs={'pk': item_id}))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'bought'

        response = manager_client.post(reverse('finance:shopping-mark-bought', kwargs={'pk': item_id}))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = member_client.get(reverse('finance:shopping-list'))
        assert response.data == []

    def test_mark_bought_other_mess(self, outsider_client, mess, member_user):
        item = ShoppingItem.objects.create(mess=mess, name='Eggs', added_by=member_user)

        response = outsider_client.post(reverse('finance:shopping-mark-bought', kwargs={'pk': item.id}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Rent API Tests
# =============================================================================

@pytest.mark.django_db
class TestRentAPI:

    def test_rent_summary(self, member_client, mess, member_user):
        Deposit.objects.create(
            mess=mess, user=member_user, amount=Decimal('3000'), category='rent',
            rent_month='2025-01', date=date(2025, 1, 2)
        )

        response = member_client.get(reverse('finance:rent-summary'), {'period': '2025-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['collection_rate'] == Decimal('100.00')

    def test_my_rent(self, member_client, mess):
        response = member_client.get(reverse('finance:my-rent'), {'period': '2025-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['rent'] == Decimal('3000.00')
        assert response.data['remaining'] == Decimal('3000.00')
        assert response.data['payments'] == []

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('finance:rent-summary'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
