from .ticket_serializers import (
    PaginatedTicketsSerializer,
    SupportTicketCreateSerializer,
    SupportTicketSerializer,
    SupportTicketStatusSerializer,
)


__all__ = [
    "SupportTicketSerializer",
    "SupportTicketCreateSerializer",
    "SupportTicketStatusSerializer",
    "PaginatedTicketsSerializer",
]
