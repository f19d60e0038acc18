from rest_framework import serializers

from apps.settlement.serializers import MoneyField
from .models import MealRecord, MealType


# =============================================================================
# Input Serializers
# =============================================================================

class ToggleMealSerializer(serializers.Serializer):
    """
    Input for toggling one meal.

    Fields:
        user_id (UUID): Member whose meal changes, defaults to the caller
        date (date): Day of the meal
        meal_type (str): breakfast, lunch or dinner
        taken (bool): Whether the meal was taken
    """

    user_id = serializers.UUIDField(required=False)
    date = serializers.DateField()
    meal_type = serializers.ChoiceField(choices=MealType.choices)
    taken = serializers.BooleanField()


class TrackerQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


class MealRangeQuerySerializer(serializers.Serializer):
    """
    Query Parameters:
        start (date): First day, required
        end (date): Last day, required
        user (UUID): Only this member's records
    """

    start = serializers.DateField()
    end = serializers.DateField()
    user = serializers.UUIDField(required=False)

    def validate(self, attrs):
        if attrs['start'] > attrs['end']:
            raise serializers.ValidationError({'end': 'End date must be after start date'})
        if (attrs['end'] - attrs['start']).days > 366:
            raise serializers.ValidationError({'end': 'Range cannot exceed one year'})
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class MealRecordSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    display_name = serializers.CharField(source='user.get_display_name', read_only=True)
    meal_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = MealRecord
        fields = [
            'id',
            'user_id',
            'display_name',
            'date',
            'breakfast',
            'lunch',
            'dinner',
            'meal_count',
            'updated_at',
        ]
        read_only_fields = fields


class TrackerRowSerializer(serializers.Serializer):
    user_id = serializers.CharField()
    display_name = serializers.CharField()
    role = serializers.CharField()
    breakfast = serializers.BooleanField()
    lunch = serializers.BooleanField()
    dinner = serializers.BooleanField()
    day_meals = serializers.IntegerField()
    monthly_meals = serializers.IntegerField()
    monthly_grocery_paid = MoneyField()


class BillingSummarySerializer(serializers.Serializer):
    total_meals = serializers.IntegerField()
    grocery_cost = MoneyField()
    meal_rate = MoneyField()


class DailyTrackerSerializer(serializers.Serializer):
    date = serializers.DateField()
    period = serializers.CharField()
    members = TrackerRowSerializer(many=True)
    billing = BillingSummarySerializer()
