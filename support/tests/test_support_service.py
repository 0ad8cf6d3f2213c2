"""
Tests for SupportService
"""

from unittest.mock import MagicMock

from django.test import TestCase

from infrastructure.email import EmailException, MockEmailService
from support.domain.services import SupportService
from support.models import SupportTicket
from support.tests.factories import SupportTicketFactory
from utils.service_base import ErrorCodes


class CreateTicketTest(TestCase):
    def setUp(self):
        self.email_provider = MockEmailService()
        self.service = SupportService(email_provider=self.email_provider)

    def test_create_ticket_defaults_and_acknowledges(self):
        result = self.service.create_ticket(
            {"email": "buyer@example.com", "title": "Cannot download", "content": "The zip is empty"}
        )

        self.assertTrue(result.ok)
        ticket = result.value
        self.assertEqual(ticket.status, SupportTicket.STATUS_TODO)
        self.assertEqual(ticket.type, SupportTicket.TYPE_GENERAL)

        message = self.email_provider.get_last_message()
        self.assertEqual(message.to, ["buyer@example.com"])
        self.assertIn("Cannot download", message.subject + message.body)

    def test_create_ticket_with_type(self):
        result = self.service.create_ticket(
            {"email": "a@example.com", "title": "Refund", "content": "Charged twice", "type": "payment"}
        )

        self.assertEqual(result.value.type, SupportTicket.TYPE_PAYMENT)

    def test_invalid_type_rejected(self):
        result = self.service.create_ticket({"email": "a@example.com", "title": "x", "content": "y", "type": "sales"})

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INVALID_INPUT)
        self.assertFalse(SupportTicket.objects.exists())

    def test_email_failure_keeps_ticket(self):
        provider = MagicMock()
        provider.send.side_effect = EmailException("smtp down")
        service = SupportService(email_provider=provider)

        result = service.create_ticket({"email": "a@example.com", "title": "Help", "content": "Please"})

        self.assertTrue(result.ok)
        self.assertTrue(SupportTicket.objects.filter(id=result.value.id).exists())


class TicketQueriesTest(TestCase):
    def setUp(self):
        self.service = SupportService(email_provider=MockEmailService())

    def test_paginated_tickets(self):
        SupportTicketFactory.create_batch(5)

        result = self.service.get_paginated_tickets(page=2, limit=2)

        self.assertEqual(len(result.value["data"]), 2)
        self.assertEqual(result.value["meta"], {"total": 5, "page": 2, "limit": 2})

    def test_paginated_limit_capped(self):
        result = self.service.get_paginated_tickets(page=1, limit=1000)

        self.assertEqual(result.value["meta"]["limit"], 100)

    def test_get_all_tickets(self):
        SupportTicketFactory.create_batch(3)

        self.assertEqual(len(self.service.get_all_tickets().value), 3)

    def test_get_ticket_not_found(self):
        result = self.service.get_ticket("00000000-0000-0000-0000-000000000000")

        self.assertEqual(result.error, ErrorCodes.NOT_FOUND)

    def test_title_prefix_is_case_insensitive(self):
        SupportTicketFactory(title="Payment failed")
        SupportTicketFactory(title="Paywall question")
        SupportTicketFactory(title="Login issue")

        titles = {t.title for t in self.service.get_tickets_by_title("pay").value}

        self.assertEqual(titles, {"Payment failed", "Paywall question"})

    def test_email_prefix(self):
        SupportTicketFactory(email="alice@example.com")
        SupportTicketFactory(email="bob@example.com")

        result = self.service.get_tickets_by_email("ALI")

        self.assertEqual([t.email for t in result.value], ["alice@example.com"])

    def test_tickets_by_status(self):
        SupportTicketFactory(status=SupportTicket.STATUS_DONE)
        SupportTicketFactory(status=SupportTicket.STATUS_TODO)

        result = self.service.get_tickets_by_status("done")

        self.assertEqual(len(result.value), 1)

    def test_tickets_by_unknown_status(self):
        result = self.service.get_tickets_by_status("closed")

        self.assertEqual(result.error, ErrorCodes.INVALID_INPUT)


class UpdateTicketTest(TestCase):
    def setUp(self):
        self.service = SupportService(email_provider=MockEmailService())

    def test_update_status(self):
        ticket = SupportTicketFactory()

        result = self.service.update_ticket(ticket.id, SupportTicket.STATUS_IN_PROGRESS)

        self.assertTrue(result.ok)
        ticket.refresh_from_db()
        self.assertEqual(ticket.status, "inProgress")

    def test_update_invalid_status(self):
        ticket = SupportTicketFactory()

        result = self.service.update_ticket(ticket.id, "archived")

        self.assertEqual(result.error, ErrorCodes.INVALID_INPUT)

    def test_update_missing_ticket(self):
        result = self.service.update_ticket("00000000-0000-0000-0000-000000000000", "done")

        self.assertEqual(result.error, ErrorCodes.NOT_FOUND)
