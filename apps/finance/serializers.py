from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from apps.settlement.serializers import PeriodQuerySerializer, MoneyField
from .models import (
    Expense,
    ExpenseCategory,
    Deposit,
    GroceryPurchase,
    ShoppingItem,
    period_validator,
)


# =============================================================================
# Input Serializers
# =============================================================================

class ExpenseFilterSerializer(PeriodQuerySerializer):
    """
    Validate query parameters for expense listing.

    Query Parameters:
        period (str): Month in YYYY-MM format, defaults to current month
        category (str): Only expenses of this category
    """

    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)


class DepositFilterSerializer(PeriodQuerySerializer):
    user = serializers.UUIDField(required=False)


class ExpenseCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    category = serializers.ChoiceField(
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.UTILITY
    )
    # Omitted or null: paid from the mess fund
    paid_by = serializers.UUIDField(required=False, allow_null=True)
    date = serializers.DateField(required=False)
    note = serializers.CharField(required=False, allow_blank=True, default='')


class DepositCreateSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    category = serializers.CharField(max_length=50, default='general')
    rent_month = serializers.CharField(
        max_length=7,
        required=False,
        allow_blank=True,
        default='',
        validators=[period_validator]
    )
    date = serializers.DateField(required=False)
    note = serializers.CharField(required=False, allow_blank=True, default='')


class GroceryPurchaseCreateSerializer(serializers.Serializer):
    items = serializers.CharField()
    total_cost = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    date = serializers.DateField(required=False)


class ShoppingItemCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    quantity = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')


# =============================================================================
# Output Serializers
# =============================================================================

class ExpenseSerializer(serializers.ModelSerializer):
    paid_by = serializers.CharField(source='payer', read_only=True)
    paid_by_name = serializers.SerializerMethodField()
    recorded_by = UserPublicSerializer(read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id',
            'title',
            'amount',
            'category',
            'paid_by',
            'paid_by_name',
            'recorded_by',
            'date',
            'note',
            'created_at',
        ]
        read_only_fields = fields

    def get_paid_by_name(self, obj):
        return obj.paid_by.get_display_name() if obj.paid_by else 'Mess Fund'


class DepositSerializer(serializers.ModelSerializer):
    user = UserPublicSerializer(read_only=True)
    category_label = serializers.CharField(read_only=True)

    class Meta:
        model = Deposit
        fields = [
            'id',
            'user',
            'amount',
            'category',
            'category_label',
            'rent_month',
            'date',
            'note',
            'created_at',
        ]
        read_only_fields = fields


class GroceryPurchaseSerializer(serializers.ModelSerializer):
    bought_by = UserPublicSerializer(read_only=True)

    class Meta:
        model = GroceryPurchase
        fields = ['id', 'bought_by', 'expense', 'items', 'total_cost', 'date', 'created_at']
        read_only_fields = fields


class ShoppingItemSerializer(serializers.ModelSerializer):
    added_by = UserPublicSerializer(read_only=True)
    bought_by = UserPublicSerializer(read_only=True)

    class Meta:
        model = ShoppingItem
        fields = ['id', 'name', 'quantity', 'status', 'added_by', 'bought_by', 'created_at', 'bought_at']
        read_only_fields = fields


class OverheadCategorySerializer(serializers.Serializer):
    category = serializers.CharField()
    total = MoneyField()
    per_member = MoneyField()


class OverheadSummarySerializer(serializers.Serializer):
    period = serializers.CharField()
    member_count = serializers.IntegerField()
    total = MoneyField()
    per_member = MoneyField()
    categories = OverheadCategorySerializer(many=True)


class MemberDepositsSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    display_name = serializers.CharField()
    total = MoneyField()
    by_category = serializers.DictField(child=MoneyField())


class DepositSummarySerializer(serializers.Serializer):
    period = serializers.CharField()
    total = MoneyField()
    by_category = serializers.DictField(child=MoneyField())
    members = MemberDepositsSerializer(many=True)


class GrocerySpentSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    display_name = serializers.CharField()
    total = MoneyField()
    purchases = serializers.IntegerField()


class RentStatusSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    display_name = serializers.CharField()
    rent = MoneyField()
    paid = MoneyField()
    remaining = MoneyField()
    is_fully_paid = serializers.BooleanField()
    payments = DepositSerializer(many=True)


class RentSummarySerializer(serializers.Serializer):
    period = serializers.CharField()
    total_rent = MoneyField()
    total_paid = MoneyField()
    total_remaining = MoneyField()
    collection_rate = MoneyField()
    members = RentStatusSerializer(many=True)
