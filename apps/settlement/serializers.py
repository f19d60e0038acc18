from decimal import ROUND_HALF_UP

from rest_framework import serializers

from .exceptions import InvalidPeriodError
from .periods import Period, PERIOD_RE


# =============================================================================
# Input Serializers
# =============================================================================

class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate the month query parameter.

    Query Parameters:
        period (str): Month in YYYY-MM format (e.g., '2025-01').
            Defaults to the current month.

    The validated ``period`` is a Period instance.
    """

    period = serializers.RegexField(
        regex=PERIOD_RE,
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )

    def validate_period(self, value):
        if not value:
            return None
        try:
            return Period.parse(value)
        except InvalidPeriodError as e:
            raise serializers.ValidationError(str(e))

    def validate(self, attrs):
        if attrs.get('period') is None:
            attrs['period'] = Period.current()
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class MoneyField(serializers.DecimalField):
    """Two-decimal amount, rounded half up for display."""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 14)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('rounding', ROUND_HALF_UP)
        kwargs.setdefault('read_only', True)
        super().__init__(**kwargs)


class MemberBalanceSerializer(serializers.Serializer):
    uid = serializers.CharField()
    display_name = serializers.CharField()
    role = serializers.CharField()
    meal_count = serializers.IntegerField()
    deposits = MoneyField()
    meal_expenses_paid = MoneyField()
    utility_paid = MoneyField()
    credit = MoneyField()
    meal_cost = MoneyField()
    utility_share = MoneyField()
    balance = MoneyField()
    status = serializers.CharField()


class MonthStatsSerializer(serializers.Serializer):
    total_meals = serializers.IntegerField()
    meal_cost_total = MoneyField()
    total_deposits = MoneyField()
    utility_total = MoneyField()
    utility_share = MoneyField()
    meal_rate = MoneyField()
    balance_total = MoneyField()
    members = MemberBalanceSerializer(many=True)


class OverviewSerializer(serializers.Serializer):
    period = serializers.CharField()
    currency = serializers.CharField()
    stats = MonthStatsSerializer(allow_null=True)
    me = MemberBalanceSerializer(allow_null=True)


class ExpenseEntrySerializer(serializers.Serializer):
    paid_by = serializers.CharField()
    amount = MoneyField()
    category = serializers.CharField()
    date = serializers.DateField()


class DepositEntrySerializer(serializers.Serializer):
    amount = MoneyField()
    category = serializers.CharField()
    date = serializers.DateField()


class MemberDetailSerializer(serializers.Serializer):
    balance = MemberBalanceSerializer()
    deposits = DepositEntrySerializer(many=True)
    meal_expenses = ExpenseEntrySerializer(many=True)
    utility_expenses = ExpenseEntrySerializer(many=True)


class BalanceSheetSerializer(serializers.Serializer):
    period = serializers.CharField()
    currency = serializers.CharField()
    stats = MonthStatsSerializer(allow_null=True)
    details = MemberDetailSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
