import uuid

from django.db import models


class SupportTicket(models.Model):
    STATUS_IN_PROGRESS = "inProgress"
    STATUS_TODO = "todo"
    STATUS_BACKLOG = "backlog"
    STATUS_DONE = "done"

    STATUS_CHOICES = [
        (STATUS_IN_PROGRESS, "In progress"),
        (STATUS_TODO, "To do"),
        (STATUS_BACKLOG, "Backlog"),
        (STATUS_DONE, "Done"),
    ]

    TYPE_GENERAL = "general"
    TYPE_TECHNICAL = "technical"
    TYPE_PAYMENT = "payment"

    TYPE_CHOICES = [
        (TYPE_GENERAL, "General"),
        (TYPE_TECHNICAL, "Technical"),
        (TYPE_PAYMENT, "Payment"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(db_index=True)
    title = models.CharField(max_length=200, db_index=True)
    content = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_TODO, db_index=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_GENERAL)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "support"
        db_table = "support_tickets"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.status})"
