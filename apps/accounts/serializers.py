from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import User

PASSWORD_INPUT = {'input_type': 'password'}


class UserSerializer(serializers.ModelSerializer):
    """The caller's own account."""

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name', 'phone', 'email_verified', 'created_at', 'last_login']
        read_only_fields = ['id', 'email', 'email_verified', 'created_at', 'last_login']


class UserPublicSerializer(serializers.ModelSerializer):
    """What housemates may see of each other."""

    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields


class UserRegistrationSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, validators=[validate_password], style=PASSWORD_INPUT)
    password_confirm = serializers.CharField(write_only=True, style=PASSWORD_INPUT)

    class Meta:
        model = User
        fields = ['email', 'password', 'password_confirm', 'display_name']
        # register_user reports duplicates itself
        extra_kwargs = {'email': {'validators': []}}

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({'password_confirm': 'Passwords do not match'})
        return attrs


class UserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style=PASSWORD_INPUT)


class ProfileUpdateSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)


class VerifyEmailSerializer(serializers.Serializer):
    token = serializers.CharField(help_text="Token issued at registration")


class SessionSerializer(serializers.Serializer):
    """Who is calling and in which mess; role and mess_id are null before onboarding."""

    uid = serializers.UUIDField()
    email = serializers.EmailField()
    display_name = serializers.CharField()
    role = serializers.CharField(allow_null=True)
    mess_id = serializers.CharField(allow_null=True)
