import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from marketplace.catalog.domain.models.catalog import CodeRepo


class Order(models.Model):
    # Mirrors the payment provider's intent lifecycle
    STATUS_REQUIRES_PAYMENT_METHOD = "REQUIRESPAYMENTMETHOD"
    STATUS_REQUIRES_CONFIRMATION = "REQUIRESCONFIRMATION"
    STATUS_REQUIRES_ACTION = "REQUIRESACTION"
    STATUS_PROCESSING = "PROCESSING"
    STATUS_REQUIRES_CAPTURE = "REQUIRESCAPTURE"
    STATUS_CANCELLED = "CANCELLED"
    STATUS_SUCCEEDED = "SUCCEEDED"

    STATUS_CHOICES = [
        (STATUS_REQUIRES_PAYMENT_METHOD, "Requires payment method"),
        (STATUS_REQUIRES_CONFIRMATION, "Requires confirmation"),
        (STATUS_REQUIRES_ACTION, "Requires action"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_REQUIRES_CAPTURE, "Requires capture"),
        (STATUS_CANCELLED, "Cancelled"),
        (STATUS_SUCCEEDED, "Succeeded"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders")
    code_repo = models.ForeignKey(CodeRepo, on_delete=models.PROTECT, related_name="orders")

    status = models.CharField(max_length=24, choices=STATUS_CHOICES, default=STATUS_REQUIRES_PAYMENT_METHOD)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)

    # Unique: the checkout pipeline keys its idempotency on it
    stripe_payment_intent_id = models.CharField(max_length=255, unique=True, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        db_table = "orders"
        indexes = [
            models.Index(fields=["user", "-created_at"]),
            models.Index(fields=["code_repo", "status"]),
            models.Index(fields=["status", "-created_at"]),
        ]

    def __str__(self):
        return f"Order {str(self.id)[:8]} ({self.status})"


class UserRepoAccess(models.Model):
    """Entitles a buyer to a repository's source."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="repo_access")
    code_repo = models.ForeignKey(CodeRepo, on_delete=models.CASCADE, related_name="access_grants")
    order = models.ForeignKey(Order, on_delete=models.SET_NULL, null=True, blank=True, related_name="access_grants")
    granted_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "marketplace"
        db_table = "user_repo_access"
        constraints = [models.UniqueConstraint(fields=["user", "code_repo"], name="unique_user_repo_access")]
        indexes = [models.Index(fields=["expires_at"])]

    def is_expired(self):
        return self.expires_at is not None and self.expires_at <= timezone.now()

    def __str__(self):
        return f"{self.user_id} -> {self.code_repo_id}"
