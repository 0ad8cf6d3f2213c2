from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    BanUserSerializer,
    LoginRequestSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    UserRegistrationSerializer,
    UserSerializer,
    VerifyEmailRequestSerializer,
)
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    LoginResponseSerializer,
    MessageResponseSerializer,
    RegisterResponseSerializer,
)
from authentication.authentication import clear_session_cookie, set_session_cookie
from authentication.permissions import IsAdminUser, NotBanned
from infrastructure.container import container
from utils.service_base import error_status


def result_error_response(result):
    """Translate a failed auth Result into the API error body."""
    return Response(
        {"detail": result.error or result.message, "error": result.error_code},
        status=error_status(result.error_code),
    )


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        description="""
        Authenticate with email and password.

        The access token is returned in the body and set as an HttpOnly
        session cookie. Banned users are rejected with 403 until the ban expires.
        """,
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="User is banned"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.auth_service().login(
            serializer.validated_data["email"], serializer.validated_data["password"]
        )
        if not result.success:
            return result_error_response(result)

        response = Response(
            {
                "message": result.message,
                "access": result.access_token,
                "refresh": result.refresh_token,
                "user": UserSerializer(result.user).data,
            },
            status=status.HTTP_200_OK,
        )
        return set_session_cookie(response, result.access_token)


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_register",
        summary="Register new user account",
        request=UserRegistrationSerializer,
        responses={
            201: RegisterResponseSerializer,
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email already in use"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.auth_service().register(**serializer.validated_data)
        if not result.success:
            return result_error_response(result)

        return Response(
            {"message": result.message, "email_sent": result.email_sent, "user": UserSerializer(result.user).data},
            status=status.HTTP_201_CREATED,
        )


class LogoutAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_logout",
        summary="Logout",
        description="Blacklist the refresh token (if sent) and clear the session cookie.",
        responses={200: MessageResponseSerializer},
        tags=["Authentication"],
    )
    def post(self, request):
        result = container.auth_service().logout(request.data.get("refresh"))
        return clear_session_cookie(Response({"message": result.message}, status=status.HTTP_200_OK))


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated, NotBanned]

    @extend_schema(operation_id="auth_me", responses={200: UserSerializer}, tags=["Authentication"])
    def get(self, request):
        result = container.auth_service().me(request.user)
        return Response(UserSerializer(result.data["user"]).data)


class SendVerificationCodeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_send_verification_code",
        summary="Send (or resend) the email verification code",
        responses={200: MessageResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Authentication"],
    )
    def post(self, request):
        result = container.auth_service().send_verification_code(request.user)
        if not result.success:
            return result_error_response(result)
        return Response({"message": result.message})


class VerifyEmailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_verify_email",
        request=VerifyEmailRequestSerializer,
        responses={200: MessageResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = VerifyEmailRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.auth_service().verify_email(request.user, serializer.validated_data["code"])
        if not result.success:
            return result_error_response(result)
        return Response({"message": result.message})


class PasswordResetRequestView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_password_reset_request",
        request=PasswordResetRequestSerializer,
        responses={200: MessageResponseSerializer},
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.auth_service().create_password_reset_token(serializer.validated_data["email"])
        return Response({"message": result.message})


class PasswordResetConfirmView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_password_reset_confirm",
        request=PasswordResetConfirmSerializer,
        responses={200: MessageResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.auth_service().reset_password(
            serializer.validated_data["token"], serializer.validated_data["new_password"]
        )
        if not result.success:
            return result_error_response(result)
        return Response({"message": result.message})


class AdminBanUserView(APIView):
    """POST bans a user until the given time, DELETE lifts the ban."""

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="admin_ban_user",
        request=BanUserSerializer,
        responses={200: UserSerializer, 404: ErrorResponseSerializer},
        tags=["Admin - Users"],
    )
    def post(self, request, user_id):
        serializer = BanUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.auth_service().ban_user(user_id, serializer.validated_data["banned_until"])
        if not result.success:
            return result_error_response(result)
        return Response(UserSerializer(result.data["user"]).data)

    @extend_schema(
        operation_id="admin_unban_user",
        responses={200: UserSerializer, 404: ErrorResponseSerializer},
        tags=["Admin - Users"],
    )
    def delete(self, request, user_id):
        result = container.auth_service().unban_user(user_id)
        if not result.success:
            return result_error_response(result)
        return Response(UserSerializer(result.data["user"]).data)
