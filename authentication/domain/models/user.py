import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class CustomUser(AbstractUser):
    ROLE_USER = "user"
    ROLE_SELLER = "seller"
    ROLE_MODERATOR = "moderator"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = [
        (ROLE_USER, "User"),
        (ROLE_SELLER, "Seller"),
        (ROLE_MODERATOR, "Moderator"),
        (ROLE_ADMIN, "Admin"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=30, blank=True)
    last_name = models.CharField(max_length=30, blank=True)
    is_email_verified = models.BooleanField(default=False)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    is_seller_verified = models.BooleanField(default=False)

    # Moderation
    banned_until = models.DateTimeField(null=True, blank=True, help_text="User cannot log in before this time")

    deleted_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"
        indexes = [
            models.Index(fields=["role"]),
            models.Index(fields=["banned_until"]),
        ]

    def is_seller(self):
        """Check if user is a verified seller"""
        return (self.role == self.ROLE_SELLER and self.is_seller_verified) or self.is_admin()

    def is_admin(self):
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def is_moderator(self):
        return self.role == self.ROLE_MODERATOR or self.is_admin()

    def can_sell_products(self):
        return self.is_seller()

    def is_banned(self):
        return self.banned_until is not None and self.banned_until > timezone.now()

    def __str__(self):
        return self.email
