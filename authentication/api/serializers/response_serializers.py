"""
Response Serializers for API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from .auth_serializers import UserSerializer


class ErrorResponseSerializer(serializers.Serializer):
    detail = serializers.CharField(help_text="Human readable error")
    error = serializers.CharField(help_text="Machine readable error code", required=False)


class LoginResponseSerializer(serializers.Serializer):
    """Response for successful login"""

    message = serializers.CharField(help_text="Success message")
    access = serializers.CharField(help_text="JWT access token (also set as an HttpOnly cookie)")
    refresh = serializers.CharField(help_text="JWT refresh token")
    user = UserSerializer(help_text="User details")


class RegisterResponseSerializer(serializers.Serializer):
    """Response for successful registration"""

    message = serializers.CharField(help_text="Success message with instructions")
    email_sent = serializers.BooleanField()
    user = UserSerializer(help_text="Newly registered user details")


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ConnectAccountResponseSerializer(serializers.Serializer):
    account_id = serializers.CharField()
    onboarding_url = serializers.URLField()


class AccountStatusResponseSerializer(serializers.Serializer):
    is_verified = serializers.BooleanField()
    account_status = serializers.ChoiceField(choices=["active", "pending"])


class UserPageMetaSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()


class PaginatedUsersResponseSerializer(serializers.Serializer):
    data = UserSerializer(many=True)
    meta = UserPageMetaSerializer()
