from django.contrib import admin
from django.utils.html import format_html

from .models import Payout, PayoutRequest, SalesAggregate


STATUS_COLORS = {
    "PENDING": "orange",
    "APPROVED": "blue",
    "PROCESSING": "blue",
    "PROCESSED": "green",
    "COMPLETED": "green",
    "REJECTED": "gray",
    "FAILED": "red",
}


def status_badge(obj):
    color = STATUS_COLORS.get(obj.status, "black")
    return format_html('<span style="color: {}; font-weight: bold;">{}</span>', color, obj.get_status_display())


status_badge.short_description = "Status"


@admin.register(PayoutRequest)
class PayoutRequestAdmin(admin.ModelAdmin):
    list_display = ["id_short", "seller_profile", "amount_display", status_badge, "processed_by", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["seller_profile__business_name", "seller_profile__user__email", "admin_note"]
    readonly_fields = ["id", "last_payout_date", "processed_at", "processed_by", "created_at", "updated_at"]
    ordering = ["-created_at"]

    def id_short(self, obj):
        return str(obj.id)[:8]

    id_short.short_description = "ID"

    def amount_display(self, obj):
        return f"${obj.total_amount:.2f}"

    amount_display.short_description = "Amount"


@admin.register(Payout)
class PayoutAdmin(admin.ModelAdmin):
    list_display = ["id", "seller_profile", "total_amount", "currency", status_badge, "stripe_payout_id", "created_at"]
    list_filter = ["status", "currency", "created_at"]
    search_fields = ["stripe_payout_id", "seller_profile__business_name", "seller_profile__user__email"]
    readonly_fields = ["id", "payout_request", "stripe_payout_id", "failure_reason", "created_at", "updated_at"]


@admin.register(SalesAggregate)
class SalesAggregateAdmin(admin.ModelAdmin):
    list_display = ["seller", "date", "revenue", "sales_count"]
    list_filter = ["date"]
    search_fields = ["seller__email", "seller__username"]
    date_hierarchy = "date"
