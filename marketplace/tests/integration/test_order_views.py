from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import AdminFactory, UserFactory
from infrastructure.container import container
from marketplace.models import Order
from marketplace.tests.factories import OrderFactory, UserRepoAccessFactory


class OrderViewIntegrationTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.buyer = UserFactory()
        self.order = OrderFactory(user=self.buyer)

    def test_list_requires_authentication(self):
        response = self.client.get(reverse("marketplace:order-list"))

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_buyer_lists_own_orders(self):
        OrderFactory()
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(reverse("marketplace:order-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([o["id"] for o in response.data], [str(self.order.id)])

    def test_other_user_cannot_view_order(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.get(reverse("marketplace:order-detail", args=[self.order.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_filters_by_status(self):
        self.client.force_authenticate(user=AdminFactory())

        response = self.client.get(reverse("marketplace:order-by-status"), {"status": Order.STATUS_SUCCEEDED})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_purchased_repos(self):
        access = UserRepoAccessFactory(user=self.buyer)
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(reverse("marketplace:order-purchased-repos"))

        self.assertEqual([r["id"] for r in response.data], [str(access.code_repo_id)])
