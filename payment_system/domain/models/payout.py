import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from authentication.domain.models import SellerProfile


class PayoutRequest(models.Model):
    """
    A seller's request to withdraw part of their balance.

    Requests are reviewed by an admin; approval debits the balance and
    creates a Payout that is sent to the provider asynchronously.
    """

    STATUS_PENDING = "PENDING"
    STATUS_APPROVED = "APPROVED"
    STATUS_REJECTED = "REJECTED"
    STATUS_PROCESSED = "PROCESSED"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_PROCESSED, "Processed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller_profile = models.ForeignKey(SellerProfile, on_delete=models.CASCADE, related_name="payout_requests")

    total_amount = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    # Seller's last payout date at the time of the request
    last_payout_date = models.DateTimeField(null=True, blank=True)

    processed_at = models.DateTimeField(null=True, blank=True)
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="processed_payout_requests",
    )
    admin_note = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "payment_system"
        db_table = "payout_requests"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["seller_profile", "-created_at"]),
            models.Index(fields=["status", "-created_at"]),
        ]

    def __str__(self):
        return f"PayoutRequest {str(self.id)[:8]} {self.total_amount} ({self.status})"


class Payout(models.Model):
    """
    Money sent to a seller's connected account.
    """

    STATUS_PENDING = "PENDING"
    STATUS_PROCESSING = "PROCESSING"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_FAILED = "FAILED"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_FAILED, "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller_profile = models.ForeignKey(SellerProfile, on_delete=models.CASCADE, related_name="payouts")
    payout_request = models.OneToOneField(
        PayoutRequest, on_delete=models.SET_NULL, null=True, blank=True, related_name="payout"
    )

    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="myr")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    stripe_payout_id = models.CharField(max_length=255, blank=True, null=True, help_text="Provider transfer ID")
    failure_reason = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "payment_system"
        db_table = "payouts"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["seller_profile", "-created_at"])]

    def __str__(self):
        return f"Payout {str(self.id)[:8]} {self.total_amount} {self.currency.upper()} ({self.status})"
