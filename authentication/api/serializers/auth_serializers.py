from django.contrib.auth.password_validation import validate_password
from django.utils import timezone
from rest_framework import serializers

from authentication.domain.models import CustomUser

from .profile_serializers import ProfileSerializer


class UserSerializer(serializers.ModelSerializer):
    profile = ProfileSerializer(read_only=True)

    class Meta:
        model = CustomUser
        fields = (
            "id",
            "username",
            "email",
            "date_joined",
            "is_email_verified",
            "role",
            "is_seller_verified",
            "banned_until",
            "profile",
        )
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate_password(self, value):
        validate_password(value)
        return value


class LoginRequestSerializer(serializers.Serializer):
    """Request body for login"""

    email = serializers.EmailField(help_text="User's email address")
    password = serializers.CharField(write_only=True, style={"input_type": "password"}, help_text="User's password")


class VerifyEmailRequestSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=8, help_text="8-digit code from the verification email")


class PasswordResetRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()


class PasswordResetConfirmSerializer(serializers.Serializer):
    token = serializers.CharField()
    new_password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate_new_password(self, value):
        validate_password(value)
        return value


class BanUserSerializer(serializers.Serializer):
    banned_until = serializers.DateTimeField()

    def validate_banned_until(self, value):
        if value <= timezone.now():
            raise serializers.ValidationError("banned_until must be in the future.")
        return value


class AdminUserCreateSerializer(UserRegistrationSerializer):
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES, default=CustomUser.ROLE_USER)


class AdminUserUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    username = serializers.CharField(max_length=150, required=False)
    password = serializers.CharField(write_only=True, required=False, style={"input_type": "password"})
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES, required=False)

    def validate_password(self, value):
        validate_password(value)
        return value


class AdminUserProfileUpdateSerializer(serializers.Serializer):
    """Sellers take the business fields, everyone else fullname and password."""

    fullname = serializers.CharField(max_length=100, required=False)
    password = serializers.CharField(write_only=True, required=False, style={"input_type": "password"})
    business_name = serializers.CharField(max_length=200, required=False)
    business_address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    business_phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    business_email = serializers.EmailField(required=False, allow_blank=True)

    def validate_password(self, value):
        validate_password(value)
        return value
