from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Mess, MessMembership, MessRole


class MessSerializer(serializers.ModelSerializer):
    """Main serializer for messes."""

    manager = UserPublicSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Mess
        fields = [
            'id',
            'name',
            'currency',
            'manager',
            'member_count',
            'user_role',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.memberships.count()

    def get_user_role(self, obj):
        """Get current user's role in the mess."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.get_user_role(request.user)
        return None


class MessCreateSerializer(serializers.Serializer):
    """Serializer for creating a mess during onboarding."""

    name = serializers.CharField(max_length=200)
    currency = serializers.CharField(max_length=3, required=False)


class MessSettingsSerializer(serializers.Serializer):
    """Manager-editable mess settings."""

    name = serializers.CharField(max_length=200, required=False)
    currency = serializers.CharField(min_length=3, max_length=3, required=False)


class MessMemberSerializer(serializers.ModelSerializer):
    """Member information for the members list."""

    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = MessMembership
        fields = ['id', 'user', 'role', 'monthly_rent', 'joined_at']
        read_only_fields = fields


class JoinMessSerializer(serializers.Serializer):
    """Serializer for joining a mess with its code."""

    code = serializers.CharField(min_length=6, max_length=6)


class UpdateMemberRoleSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    role = serializers.ChoiceField(choices=MessRole.choices)


class RemoveMemberSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


class UpdateMemberRentSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    monthly_rent = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00'),
    )
