import pytest
from datetime import date
from decimal import Decimal

from apps.finance.models import Expense
from apps.meals.models import MealRecord
from apps.meals.services import (
    toggle_meal,
    list_meals,
    daily_tracker,
    NotInMessError,
    NotMemberError,
    InsufficientPermissionsError,
    InvalidMealTypeError,
)
from apps.messes.models import MessMembership

DAY = date(2025, 1, 10)


@pytest.mark.django_db
class TestToggleMeal:

    def test_first_toggle_creates_record(self, mess, member_user):
        record = toggle_meal(
            mess_id=mess.id, actor=member_user, user_id=member_user.id,
            day=DAY, meal_type='lunch', taken=True,
        )

        assert record.lunch
        assert not record.breakfast
        assert record.meal_count == 1

    def test_toggles_update_same_record(self, mess, member_user):
        for meal_type in ('breakfast', 'lunch', 'dinner'):
            toggle_meal(
                mess_id=mess.id, actor=member_user, user_id=member_user.id,
                day=DAY, meal_type=meal_type, taken=True,
            )
        record = toggle_meal(
            mess_id=mess.id, actor=member_user, user_id=member_user.id,
            day=DAY, meal_type='lunch', taken=False,
        )

        assert MealRecord.objects.filter(user=member_user, date=DAY).count() == 1
        assert record.meal_count == 2

    def test_manager_can_toggle_for_member(self, mess, manager_user, member_user):
        record = toggle_meal(
            mess_id=mess.id, actor=manager_user, user_id=member_user.id,
            day=DAY, meal_type='dinner', taken=True,
        )

        assert record.user == member_user

    def test_member_cannot_toggle_for_others(self, mess, manager_user, member_user):
        with pytest.raises(InsufficientPermissionsError):
            toggle_meal(
                mess_id=mess.id, actor=member_user, user_id=manager_user.id,
                day=DAY, meal_type='dinner', taken=True,
            )

    def test_target_must_be_member(self, mess, manager_user, outsider_user):
        with pytest.raises(NotMemberError):
            toggle_meal(
                mess_id=mess.id, actor=manager_user, user_id=outsider_user.id,
                day=DAY, meal_type='dinner', taken=True,
            )

    def test_outsider_rejected(self, mess, outsider_user):
        with pytest.raises(NotInMessError):
            toggle_meal(
                mess_id=mess.id, actor=outsider_user, user_id=outsider_user.id,
                day=DAY, meal_type='dinner', taken=True,
            )

    def test_unknown_meal_type(self, mess, member_user):
        with pytest.raises(InvalidMealTypeError):
            toggle_meal(
                mess_id=mess.id, actor=member_user, user_id=member_user.id,
                day=DAY, meal_type='snack', taken=True,
            )


@pytest.mark.django_db
class TestListMeals:

    def test_range_is_inclusive(self, mess, member_user, manager_user):
        for day in (1, 5, 10, 11):
            MealRecord.objects.create(mess=mess, user=member_user, date=date(2025, 1, day), lunch=True)
        MealRecord.objects.create(mess=mess, user=manager_user, date=date(2025, 1, 5), lunch=True)

        records = list_meals(mess_id=mess.id, start=date(2025, 1, 5), end=date(2025, 1, 10))
        assert records.count() == 3

        own = list_meals(
            mess_id=mess.id, start=date(2025, 1, 5), end=date(2025, 1, 10), user_id=member_user.id
        )
        assert [r.date.day for r in own] == [5, 10]


@pytest.mark.django_db
class TestDailyTracker:

    def test_tracker_rows_and_billing(self, mess, manager_user, member_user):
        MealRecord.objects.create(mess=mess, user=member_user, date=DAY, breakfast=True, lunch=True)
        MealRecord.objects.create(mess=mess, user=member_user, date=date(2025, 1, 2), dinner=True)
        MealRecord.objects.create(mess=mess, user=manager_user, date=date(2025, 1, 3), lunch=True)
        Expense.objects.create(
            mess=mess, title='Bazar', amount=Decimal('400'), category='grocery',
            paid_by=member_user, date=date(2025, 1, 4)
        )

        tracker = daily_tracker(mess_id=mess.id, day=DAY)

        assert tracker['period'] == '2025-01'
        manager_row, member_row = tracker['members']
        assert manager_row['role'] == 'manager'
        assert manager_row['day_meals'] == 0
        assert manager_row['breakfast'] is False
        assert manager_row['monthly_meals'] == 1
        assert member_row['breakfast'] is True
        assert member_row['day_meals'] == 2
        assert member_row['monthly_meals'] == 3
        assert member_row['monthly_grocery_paid'] == Decimal('400')

        billing = tracker['billing']
        assert billing['total_meals'] == 4
        assert billing['grocery_cost'] == Decimal('400')
        assert billing['meal_rate'] == Decimal('100')

    def test_members_sorted_by_name_after_managers(self, mess, outsider_user):
        MessMembership.objects.filter(user=outsider_user).delete()
        outsider_user.display_name = 'Aaron'
        outsider_user.save()
        MessMembership.objects.create(user=outsider_user, mess=mess)

        tracker = daily_tracker(mess_id=mess.id, day=DAY)

        assert [r['display_name'] for r in tracker['members']] == ['Rahim Manager', 'Aaron', 'Karim Member']
