import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class SalesAggregate(models.Model):
    """
    Daily sales totals per seller.

    One row per (seller, date); the checkout pipeline upserts it on every
    confirmed payment.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sales_aggregates")
    date = models.DateField(db_index=True)
    revenue = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    sales_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "payment_system"
        db_table = "sales_aggregates"
        ordering = ["date"]
        constraints = [models.UniqueConstraint(fields=["seller", "date"], name="unique_seller_sales_date")]

    def __str__(self):
        return f"{self.seller_id} {self.date}: {self.revenue} ({self.sales_count})"
