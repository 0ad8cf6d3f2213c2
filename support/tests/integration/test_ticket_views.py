from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import AdminFactory, UserFactory
from infrastructure.container import container
from support.models import SupportTicket
from support.tests.factories import SupportTicketFactory


class SupportTicketViewIntegrationTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.admin = AdminFactory()
        self.list_url = reverse("support:ticket-list")

    def test_anonymous_can_open_ticket(self):
        response = self.client.post(
            self.list_url,
            {"email": "guest@example.com", "title": "Broken preview", "content": "CSS missing", "type": "technical"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "todo")
        self.assertEqual(len(container.email().sent_messages), 1)

    def test_create_validates_email(self):
        response = self.client.post(
            self.list_url, {"email": "nope", "title": "x", "content": "y"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_requires_admin(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_paginated_list(self):
        SupportTicketFactory.create_batch(3)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.list_url, {"page": 1, "limit": 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["data"]), 2)
        self.assertEqual(response.data["meta"]["total"], 3)

    def test_admin_filter_by_title(self):
        SupportTicketFactory(title="Refund please")
        SupportTicketFactory(title="Bug report")
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.list_url, {"title": "ref"})

        self.assertEqual([t["title"] for t in response.data], ["Refund please"])

    def test_admin_filter_by_bad_status(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.list_url, {"status": "closed"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_all(self):
        SupportTicketFactory.create_batch(2)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse("support:ticket-all"))

        self.assertEqual(len(response.data), 2)

    def test_admin_update_status(self):
        ticket = SupportTicketFactory()
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(
            reverse("support:ticket-detail", args=[ticket.id]), {"status": "done"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ticket.refresh_from_db()
        self.assertEqual(ticket.status, SupportTicket.STATUS_DONE)

    def test_retrieve_missing_ticket(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(
            reverse("support:ticket-detail", args=["00000000-0000-0000-0000-000000000000"])
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
