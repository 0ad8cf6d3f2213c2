from django.contrib import admin

from .models import SupportTicket


@admin.register(SupportTicket)
class SupportTicketAdmin(admin.ModelAdmin):
    list_display = ("title", "email", "type", "status", "created_at")
    list_filter = ("status", "type")
    search_fields = ("title", "email")
    readonly_fields = ("created_at", "updated_at")
