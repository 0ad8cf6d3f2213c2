import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Tag(models.Model):
    name = models.CharField(max_length=50, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        app_label = "marketplace"
        db_table = "tags"

    def __str__(self):
        return self.name


class CodeRepo(models.Model):
    """A UI component repository offered for sale by a seller."""

    LANGUAGE_JSX = "JSX"
    LANGUAGE_TSX = "TSX"
    LANGUAGE_CHOICES = [(LANGUAGE_JSX, "JSX"), (LANGUAGE_TSX, "TSX")]

    VISIBILITY_PUBLIC = "public"
    VISIBILITY_PRIVATE = "private"
    VISIBILITY_CHOICES = [(VISIBILITY_PUBLIC, "Public"), (VISIBILITY_PRIVATE, "Private")]

    STATUS_PENDING = "pending"
    STATUS_ACTIVE = "active"
    STATUS_REJECTED = "rejected"
    STATUS_BANNED_USER = "bannedUser"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACTIVE, "Active"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_BANNED_USER, "Owner banned"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="code_repos")

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    language = models.CharField(max_length=3, choices=LANGUAGE_CHOICES, default=LANGUAGE_JSX)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00"), validators=[MinValueValidator(Decimal("0.00"))]
    )

    # Gated content: only owners, admins and buyers with access see these
    source_js = models.TextField(blank=True)
    source_css = models.TextField(blank=True)

    visibility = models.CharField(max_length=10, choices=VISIBILITY_CHOICES, default=VISIBILITY_PUBLIC)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    tags = models.ManyToManyField(Tag, related_name="code_repos", blank=True)

    stripe_product_id = models.CharField(max_length=255, blank=True, null=True)
    stripe_price_id = models.CharField(max_length=255, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        db_table = "code_repos"
        indexes = [
            models.Index(fields=["user", "deleted_at"]),
            models.Index(fields=["visibility", "status", "-created_at"]),
            models.Index(fields=["language"]),
            models.Index(fields=["price"]),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="code_repo_price_non_negative"),
        ]

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def __str__(self):
        return self.name


class SearchHistory(models.Model):
    """A query or tag a user searched for; drives catalog ordering."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="search_history")
    tag = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        db_table = "search_history"
        indexes = [models.Index(fields=["user", "-created_at"])]

    def __str__(self):
        return f"{self.user_id}: {self.tag}"
