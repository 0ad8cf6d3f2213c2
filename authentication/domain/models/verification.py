import hashlib
import secrets
import uuid
from datetime import timedelta

from django.db import models
from django.utils import timezone

from .user import CustomUser


VERIFICATION_CODE_LENGTH = 8
VERIFICATION_CODE_TTL = timedelta(minutes=15)
PASSWORD_RESET_TTL = timedelta(hours=2)


class EmailVerificationCode(models.Model):
    """Numeric code mailed to a user to prove ownership of an email address."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name="verification_codes")
    email = models.EmailField(help_text="Address the code was sent to")
    code = models.CharField(max_length=VERIFICATION_CODE_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField()

    class Meta:
        app_label = "authentication"
        db_table = "email_verification_codes"

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = self.generate_code()
        if not self.expires_at:
            self.expires_at = timezone.now() + VERIFICATION_CODE_TTL
        super().save(*args, **kwargs)

    @staticmethod
    def generate_code():
        return "".join(secrets.choice("0123456789") for _ in range(VERIFICATION_CODE_LENGTH))

    def is_expired(self):
        return timezone.now() > self.expires_at

    def __str__(self):
        return f"Verification code for {self.email}"


class PasswordResetToken(models.Model):
    """Only the sha256 digest of the token is stored."""

    user = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name="password_reset_tokens")
    token_hash = models.CharField(max_length=64, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField()

    class Meta:
        app_label = "authentication"
        db_table = "password_reset_tokens"

    @staticmethod
    def hash_token(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    @classmethod
    def issue(cls, user):
        """Create a token for ``user``; returns (instance, raw_token)."""
        raw_token = secrets.token_urlsafe(32)
        instance = cls.objects.create(
            user=user,
            token_hash=cls.hash_token(raw_token),
            expires_at=timezone.now() + PASSWORD_RESET_TTL,
        )
        return instance, raw_token

    def is_expired(self):
        return timezone.now() > self.expires_at

    def __str__(self):
        return f"Password reset token for {self.user_id}"
