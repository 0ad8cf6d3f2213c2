from .ticket_views import SupportTicketViewSet


__all__ = ["SupportTicketViewSet"]
