import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from apps.settlement.exceptions import MalformedRecordError
from apps.settlement.records import (
    MESS_FUND,
    deposit_from_row,
    expense_from_row,
    meal_from_row,
    member_from_row,
)


class TestExpenseRows:

    def test_fund_paid_expense(self):
        entry = expense_from_row({
            'paid_by': None, 'amount': Decimal('120.50'), 'category': 'utility', 'date': date(2025, 1, 3),
        })

        assert entry.paid_by == MESS_FUND
        assert entry.paid_from_fund
        assert entry.amount == Decimal('120.50')

    def test_member_paid_expense_keeps_id_as_text(self):
        uid = uuid4()
        entry = expense_from_row({'paid_by': uid, 'amount': '10', 'category': 'grocery', 'date': '2025-01-03'})

        assert entry.paid_by == str(uid)
        assert entry.date == date(2025, 1, 3)
        assert entry.amount == Decimal('10')

    def test_float_amount_is_converted_exactly(self):
        entry = expense_from_row({'amount': 0.1, 'category': 'grocery', 'date': date(2025, 1, 3)})

        assert entry.amount == Decimal('0.1')

    @pytest.mark.parametrize('amount', [None, '', '-5', 'abc', 'NaN', 'Infinity'])
    def test_bad_amount_rejected(self, amount):
        with pytest.raises(MalformedRecordError):
            expense_from_row({'amount': amount, 'category': 'grocery', 'date': date(2025, 1, 3)})

    def test_unknown_category_rejected(self):
        with pytest.raises(MalformedRecordError, match='unknown category'):
            expense_from_row({'amount': '10', 'category': 'snacks', 'date': date(2025, 1, 3)})

    def test_bad_date_rejected(self):
        with pytest.raises(MalformedRecordError):
            expense_from_row({'amount': '10', 'category': 'grocery', 'date': '03/01/2025'})


class TestMealRows:

    def test_meal_row(self):
        entry = meal_from_row({
            'user_id': 'u1', 'date': date(2025, 1, 1), 'breakfast': True, 'lunch': False, 'dinner': True,
        })

        assert entry.units == 2

    def test_missing_flags_default_false(self):
        entry = meal_from_row({'user_id': 'u1', 'date': date(2025, 1, 1)})

        assert entry.units == 0

    def test_non_boolean_flag_rejected(self):
        with pytest.raises(MalformedRecordError):
            meal_from_row({'user_id': 'u1', 'date': date(2025, 1, 1), 'lunch': 'yes'})

    def test_missing_user_rejected(self):
        with pytest.raises(MalformedRecordError):
            meal_from_row({'date': date(2025, 1, 1)})


class TestDepositAndMemberRows:

    def test_deposit_category_defaults_to_general(self):
        entry = deposit_from_row({'user_id': 'u1', 'amount': '500', 'category': None, 'date': date(2025, 1, 1)})

        assert entry.category == 'general'

    def test_negative_deposit_rejected(self):
        with pytest.raises(MalformedRecordError):
            deposit_from_row({'user_id': 'u1', 'amount': '-1', 'date': date(2025, 1, 1)})

    def test_member_row(self):
        member = member_from_row({'uid': 7, 'display_name': None, 'role': 'manager'})

        assert member.uid == '7'
        assert member.display_name == ''

    def test_member_unknown_role_rejected(self):
        with pytest.raises(MalformedRecordError):
            member_from_row({'uid': 'u1', 'role': 'pending'})
