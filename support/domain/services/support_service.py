"""
SupportService - Support ticket intake and triage.
"""

import logging
from typing import Any, Dict, List

from infrastructure.email import EmailException, EmailServiceInterface
from infrastructure.email.messages import support_ticket_received_email
from support.domain.models import SupportTicket
from support.infra.observability import metrics
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


logger = logging.getLogger(__name__)

STATUSES = {choice for choice, _ in SupportTicket.STATUS_CHOICES}
TYPES = {choice for choice, _ in SupportTicket.TYPE_CHOICES}


class SupportService(BaseService):
    def __init__(self, email_provider: EmailServiceInterface):
        super().__init__()
        self.email_provider = email_provider

    @BaseService.log_performance
    def create_ticket(self, data: Dict[str, Any]) -> ServiceResult[SupportTicket]:
        """
        Open a ticket and acknowledge it by email.

        A failed acknowledgement is logged; the ticket is kept.
        """
        ticket_type = data.get("type") or SupportTicket.TYPE_GENERAL
        if ticket_type not in TYPES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid type. Must be one of: {', '.join(sorted(TYPES))}")

        ticket = SupportTicket.objects.create(
            email=data["email"],
            title=data["title"],
            content=data["content"],
            type=ticket_type,
        )
        metrics.tickets_created_total.labels(type=ticket.type).inc()

        try:
            self.email_provider.send(support_ticket_received_email(ticket.email, ticket.title))
        except EmailException as e:
            metrics.ticket_emails_failed_total.inc()
            self.logger.error(f"Could not acknowledge ticket {ticket.id}: {e}")

        return service_ok(ticket)

    def get_paginated_tickets(self, page: int = 1, limit: int = 20) -> ServiceResult[Dict[str, Any]]:
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or 20), 1), 100)

        queryset = SupportTicket.objects.order_by("-created_at")
        offset = (page - 1) * limit
        return service_ok(
            {
                "data": list(queryset[offset : offset + limit]),
                "meta": {"total": queryset.count(), "page": page, "limit": limit},
            }
        )

    def get_all_tickets(self) -> ServiceResult[List[SupportTicket]]:
        return service_ok(list(SupportTicket.objects.order_by("-created_at")))

    def get_ticket(self, ticket_id) -> ServiceResult[SupportTicket]:
        ticket = SupportTicket.objects.filter(id=ticket_id).first()
        if ticket is None:
            return service_err(ErrorCodes.NOT_FOUND, "Ticket not found")
        return service_ok(ticket)

    def get_tickets_by_title(self, prefix: str) -> ServiceResult[List[SupportTicket]]:
        return service_ok(list(SupportTicket.objects.filter(title__istartswith=prefix).order_by("-created_at")))

    def get_tickets_by_email(self, prefix: str) -> ServiceResult[List[SupportTicket]]:
        return service_ok(list(SupportTicket.objects.filter(email__istartswith=prefix).order_by("-created_at")))

    def get_tickets_by_status(self, status: str) -> ServiceResult[List[SupportTicket]]:
        if status not in STATUSES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid status. Must be one of: {', '.join(sorted(STATUSES))}")
        return service_ok(list(SupportTicket.objects.filter(status=status).order_by("-created_at")))

    @BaseService.log_performance
    def update_ticket(self, ticket_id, status: str) -> ServiceResult[SupportTicket]:
        if status not in STATUSES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid status. Must be one of: {', '.join(sorted(STATUSES))}")

        ticket = SupportTicket.objects.filter(id=ticket_id).first()
        if ticket is None:
            return service_err(ErrorCodes.NOT_FOUND, "Ticket not found")

        ticket.status = status
        ticket.save(update_fields=["status", "updated_at"])
        self.logger.info(f"Ticket {ticket.id} moved to {status}")
        return service_ok(ticket)
