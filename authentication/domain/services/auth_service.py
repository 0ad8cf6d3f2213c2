"""
AuthService - Core Authentication Business Logic.

Registration, login, email verification, password reset and bans. Email is
sent through the injected provider so the service stays testable.
"""

import logging
from datetime import datetime
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.api.serializers.jwt_serializers import CustomRefreshToken
from authentication.domain.events import UserBannedEvent, UserRegisteredEvent
from authentication.infra.observability import metrics
from authentication.models import EmailVerificationCode, PasswordResetToken, Profile
from infrastructure.email import EmailException, EmailServiceInterface
from infrastructure.email.messages import password_reset_email, verification_code_email
from infrastructure.events import publish_on_commit
from utils.service_base import ErrorCodes

from .results import LoginResult, RegisterResult, Result


User = get_user_model()
logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service encapsulating all auth business logic.
    """

    def __init__(self, email_provider: EmailServiceInterface):
        self.email_provider = email_provider

    def register(self, email: str, username: str, password: str) -> RegisterResult:
        """
        Register a new user with role USER and an empty profile.

        A verification code is mailed after the account is created; a mail
        failure does not undo the registration.
        """
        email = (email or "").strip().lower()
        if not email or not username or not password:
            metrics.record_registration(False, "validation_error")
            return RegisterResult(
                success=False,
                error="Email, username and password are required.",
                error_code=ErrorCodes.VALIDATION_ERROR,
            )

        if User.objects.filter(email__iexact=email).exists():
            metrics.record_registration(False, "email_exists")
            return RegisterResult(
                success=False, error="Email already in use.", error_code=ErrorCodes.EMAIL_EXISTS
            )

        with transaction.atomic():
            user = User.objects.create_user(email=email, username=username, password=password)
            Profile.objects.create(user=user, name=username)
            publish_on_commit(UserRegisteredEvent(user_id=str(user.id), email=user.email))

        email_sent = self._send_verification_code(user).success
        metrics.record_registration(True)
        logger.info(f"User registered: {user.email}")
        return RegisterResult(
            success=True,
            user=user,
            email_sent=email_sent,
            message="Registration successful. Check your email for a verification code.",
        )

    def login(self, email: str, password: str) -> LoginResult:
        if not email or not password:
            metrics.record_login(False, "validation_error")
            return LoginResult(
                success=False, error="Email and password are required.", error_code=ErrorCodes.VALIDATION_ERROR
            )

        with metrics.login_duration.time():
            user = User.objects.filter(email__iexact=email.strip(), deleted_at__isnull=True).first()
            if user is None or not user.check_password(password) or not user.is_active:
                metrics.record_login(False, "invalid_credentials")
                return LoginResult(
                    success=False, error="Invalid email or password.", error_code=ErrorCodes.INVALID_CREDENTIALS
                )

            if user.is_banned():
                metrics.record_login(False, "user_banned")
                return LoginResult(
                    success=False,
                    error=f"User is banned until {user.banned_until.isoformat()}",
                    error_code=ErrorCodes.USER_BANNED,
                )

            refresh = CustomRefreshToken.for_user(user)
            user.last_login = timezone.now()
            user.save(update_fields=["last_login"])

        metrics.record_login(True)
        logger.info(f"User logged in: {user.email}")
        return LoginResult(
            success=True,
            user=user,
            access_token=str(refresh.access_token),
            refresh_token=str(refresh),
            message="Login successful",
        )

    def logout(self, refresh_token: Optional[str]) -> Result:
        """Blacklist the refresh token; a missing or stale token is not an error."""
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                logger.info(f"Logout with unusable refresh token: {e}")
        return Result(success=True, message="Logged out")

    def send_verification_code(self, user) -> Result:
        if user.is_email_verified:
            return Result(
                success=False,
                message="Email already verified",
                error="Email already verified",
                error_code=ErrorCodes.ALREADY_VERIFIED,
            )
        result = self._send_verification_code(user)
        if result.success:
            metrics.email_verification_sent.labels(type="resend").inc()
        return result

    def _send_verification_code(self, user) -> Result:
        with transaction.atomic():
            EmailVerificationCode.objects.filter(user=user).delete()
            code = EmailVerificationCode.objects.create(user=user, email=user.email)

        try:
            self.email_provider.send(verification_code_email(user.email, code.code))
        except EmailException as e:
            logger.error(f"Failed to send verification code to {user.email}: {e}")
            return Result(success=False, message="Could not send verification email", error=str(e))

        return Result(success=True, message="Verification code sent")

    @transaction.atomic
    def verify_email(self, user, code: str) -> Result:
        if not code:
            return Result(
                success=False, message="Invalid code", error="Invalid code", error_code=ErrorCodes.INVALID_CODE
            )

        stored = EmailVerificationCode.objects.select_for_update().filter(user=user).order_by("-created_at").first()
        if stored is None or stored.code != code:
            return Result(
                success=False, message="Invalid code", error="Invalid code", error_code=ErrorCodes.INVALID_CODE
            )

        if stored.is_expired():
            return Result(
                success=False, message="Code expired", error="Code expired", error_code=ErrorCodes.CODE_EXPIRED
            )

        if stored.email != user.email:
            return Result(
                success=False,
                message="Code was issued for a different email address",
                error="Invalid code",
                error_code=ErrorCodes.INVALID_CODE,
            )

        user.is_email_verified = True
        user.save(update_fields=["is_email_verified", "updated_at"])
        EmailVerificationCode.objects.filter(user=user).delete()

        metrics.email_verification_completed.inc()
        logger.info(f"Email verified: {user.email}")
        return Result(success=True, message="Email verified")

    def create_password_reset_token(self, email: str) -> Result:
        """
        Issue a reset token and mail it.

        Always reports success so callers cannot tell which emails exist.
        """
        message = "If an account exists for this email, a reset link has been sent."
        user = User.objects.filter(email__iexact=(email or "").strip(), deleted_at__isnull=True).first()
        if user is None:
            return Result(success=True, message=message)

        with transaction.atomic():
            PasswordResetToken.objects.filter(user=user).delete()
            _, raw_token = PasswordResetToken.issue(user)

        try:
            self.email_provider.send(password_reset_email(user.email, raw_token))
            metrics.password_reset_requested.inc()
        except EmailException as e:
            logger.error(f"Failed to send password reset email to {user.email}: {e}")

        return Result(success=True, message=message)

    @transaction.atomic
    def reset_password(self, token: str, new_password: str) -> Result:
        if not token or not new_password:
            return Result(
                success=False,
                message="Token and new password are required",
                error="Token and new password are required",
                error_code=ErrorCodes.VALIDATION_ERROR,
            )

        stored = (
            PasswordResetToken.objects.select_for_update()
            .select_related("user")
            .filter(token_hash=PasswordResetToken.hash_token(token))
            .first()
        )
        if stored is None:
            return Result(
                success=False, message="Invalid token", error="Invalid token", error_code=ErrorCodes.INVALID_TOKEN
            )

        if stored.is_expired():
            stored.delete()
            return Result(
                success=False, message="Token expired", error="Token expired", error_code=ErrorCodes.TOKEN_EXPIRED
            )

        user = stored.user
        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])
        PasswordResetToken.objects.filter(user=user).delete()

        metrics.password_reset_completed.inc()
        logger.info(f"Password reset for {user.email}")
        return Result(success=True, message="Password updated")

    def me(self, user) -> Result:
        profile = Profile.objects.filter(user=user).first()
        return Result(success=True, data={"user": user, "profile": profile})

    @transaction.atomic
    def ban_user(self, user_id, banned_until: datetime) -> Result:
        if banned_until is None or banned_until <= timezone.now():
            return Result(
                success=False,
                message="banned_until must be in the future",
                error="banned_until must be in the future",
                error_code=ErrorCodes.VALIDATION_ERROR,
            )

        user = User.objects.select_for_update().filter(id=user_id).first()
        if user is None:
            return Result(
                success=False, message="User not found", error="User not found", error_code=ErrorCodes.NOT_FOUND
            )

        user.banned_until = banned_until
        user.save(update_fields=["banned_until", "updated_at"])
        publish_on_commit(UserBannedEvent(user_id=str(user.id), banned_until=banned_until.isoformat()))

        metrics.user_bans_total.labels(action="ban").inc()
        logger.info(f"User {user.email} banned until {banned_until.isoformat()}")
        return Result(success=True, message="User banned", data={"user": user})

    @transaction.atomic
    def unban_user(self, user_id) -> Result:
        user = User.objects.select_for_update().filter(id=user_id).first()
        if user is None:
            return Result(
                success=False, message="User not found", error="User not found", error_code=ErrorCodes.NOT_FOUND
            )

        user.banned_until = None
        user.save(update_fields=["banned_until", "updated_at"])

        metrics.user_bans_total.labels(action="unban").inc()
        logger.info(f"User {user.email} unbanned")
        return Result(success=True, message="User unbanned", data={"user": user})
