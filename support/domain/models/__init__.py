from .ticket import SupportTicket


__all__ = ["SupportTicket"]
