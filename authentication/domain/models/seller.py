import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class SellerProfile(models.Model):
    """Seller account: business identity, verification state and balance."""

    STATUS_IDLE = "IDLE"
    STATUS_PENDING = "PENDING"
    STATUS_APPROVED = "APPROVED"
    STATUS_REJECTED = "REJECTED"

    VERIFICATION_STATUS_CHOICES = [
        (STATUS_IDLE, "Idle"),
        (STATUS_PENDING, "Pending Review"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    BUSINESS_TYPE_CHOICES = [
        ("individual", "Individual"),
        ("company", "Company"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="seller_profile")

    business_name = models.CharField(max_length=200)
    business_address = models.CharField(max_length=255, blank=True)
    business_phone = models.CharField(max_length=30, blank=True)
    business_email = models.EmailField(blank=True)
    business_type = models.CharField(max_length=20, choices=BUSINESS_TYPE_CHOICES, default="individual")
    profile_img = models.URLField(blank=True, null=True)

    identity_doc = models.CharField(max_length=500, blank=True, null=True, help_text="Storage key of the PDF")

    verification_status = models.CharField(
        max_length=20, choices=VERIFICATION_STATUS_CHOICES, default=STATUS_IDLE, db_index=True
    )
    verification_date = models.DateTimeField(null=True, blank=True)

    stripe_account_id = models.CharField(max_length=255, blank=True, null=True, unique=True)

    balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Funds earned from sales and not yet paid out",
    )
    last_payout_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "authentication"
        db_table = "seller_profiles"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(condition=models.Q(balance__gte=0), name="seller_balance_non_negative"),
        ]

    @property
    def is_approved(self):
        return self.verification_status == self.STATUS_APPROVED

    def set_verification_status(self, status):
        """Change status; approving stamps the verification date."""
        self.verification_status = status
        if status == self.STATUS_APPROVED:
            self.verification_date = timezone.now()

    def __str__(self):
        return f"{self.business_name} ({self.verification_status})"


class BankAccount(models.Model):
    seller_profile = models.OneToOneField(SellerProfile, on_delete=models.CASCADE, related_name="bank_account")

    account_holder_name = models.CharField(max_length=200)
    account_number = models.CharField(max_length=64)
    bank_name = models.CharField(max_length=200)
    swift_code = models.CharField(max_length=11, validators=[MinLengthValidator(8)])
    iban = models.CharField(max_length=34, blank=True, null=True)
    routing_number = models.CharField(max_length=20, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "authentication"
        db_table = "bank_accounts"

    @property
    def masked_account_number(self):
        return f"****{self.account_number[-4:]}"

    def __str__(self):
        return f"{self.bank_name} {self.masked_account_number}"
