from datetime import timedelta

from django.conf import settings
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from authentication.models import SellerProfile
from authentication.tests.factories import AdminFactory, SellerProfileFactory, UserFactory
from infrastructure.container import container


class AuthViewIntegrationTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.user = UserFactory(email="member@example.com")

    def test_register(self):
        response = self.client.post(
            reverse("register"),
            {"email": "fresh@example.com", "username": "fresh", "password": "Very-Strong-Pass-91"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["role"], "user")
        self.assertEqual(len(container.email().sent_messages), 1)

    def test_register_duplicate_email_conflict(self):
        response = self.client.post(
            reverse("register"),
            {"email": "member@example.com", "username": "again", "password": "Very-Strong-Pass-91"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "email_exists")

    def test_login_sets_session_cookie(self):
        response = self.client.post(
            reverse("login"), {"email": "member@example.com", "password": "defaultpassword"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
        cookie = response.cookies[settings.AUTH_COOKIE_NAME]
        self.assertEqual(cookie.value, response.data["access"])
        self.assertTrue(cookie["httponly"])

    def test_cookie_authenticates_me(self):
        login = self.client.post(
            reverse("login"), {"email": "member@example.com", "password": "defaultpassword"}, format="json"
        )
        self.client.cookies[settings.AUTH_COOKIE_NAME] = login.data["access"]

        response = self.client.get(reverse("me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "member@example.com")

    def test_bearer_header_authenticates_me(self):
        login = self.client.post(
            reverse("login"), {"email": "member@example.com", "password": "defaultpassword"}, format="json"
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

        response = self.client.get(reverse("me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_login_wrong_password(self):
        response = self.client.post(
            reverse("login"), {"email": "member@example.com", "password": "wrong"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_login_banned(self):
        self.user.banned_until = timezone.now() + timedelta(hours=2)
        self.user.save()

        response = self.client.post(
            reverse("login"), {"email": "member@example.com", "password": "defaultpassword"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "user_banned")

    def test_banned_user_rejected_by_gates(self):
        self.user.banned_until = timezone.now() + timedelta(hours=2)
        self.user.save()
        self.client.force_authenticate(user=self.user)

        response = self.client.get(reverse("me"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(str(response.data["detail"]), "User is banned")

    def test_logout_clears_cookie(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(reverse("logout"), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.cookies[settings.AUTH_COOKIE_NAME].value, "")

    def test_password_reset_request_does_not_leak(self):
        response = self.client.post(reverse("password_reset_request"), {"email": "ghost@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)


class AdminUserViewIntegrationTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.admin = AdminFactory()
        self.user = UserFactory()

    def test_admin_can_ban_and_unban(self):
        self.client.force_authenticate(user=self.admin)
        url = reverse("admin_ban_user", args=[self.user.id])
        until = (timezone.now() + timedelta(days=1)).isoformat()

        response = self.client.post(url, {"banned_until": until}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_banned())

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertIsNone(self.user.banned_until)

    def test_non_admin_cannot_ban(self):
        self.client.force_authenticate(user=self.user)
        url = reverse("admin_ban_user", args=[self.admin.id])

        response = self.client.post(url, {"banned_until": (timezone.now() + timedelta(days=1)).isoformat()})

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_lists_users_paginated(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse("admin_users"), {"page": 1, "limit": 1})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["data"]), 1)
        self.assertEqual(response.data["meta"]["total"], 2)

    def test_admin_creates_user(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            reverse("admin_users"),
            {"email": "staff@example.com", "username": "staff", "password": "Very-Strong-Pass-91", "role": "moderator"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["role"], "moderator")

    def test_admin_gets_updates_and_deletes_user_by_email(self):
        self.client.force_authenticate(user=self.admin)
        url = reverse("admin_user_detail", args=[self.user.email])

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data["seller_profile"])

        response = self.client.patch(url, {"username": "renamed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["username"], "renamed")

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.deleted_at)

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_updates_seller_profile_by_email(self):
        profile = SellerProfileFactory()
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(
            reverse("admin_user_profile", args=[profile.user.email]), {"business_name": "Renamed"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["business_name"], "Renamed")

    def test_non_admin_cannot_list_users(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.get(reverse("admin_users_all"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_approves_seller_application(self):
        profile = SellerProfileFactory(user=self.user, verification_status=SellerProfile.STATUS_PENDING)
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(
            reverse("admin_seller_application_update", args=[profile.id]),
            {"status": SellerProfile.STATUS_APPROVED},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_seller_verified)


class SellerApplicationViewIntegrationTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)

    def test_apply(self):
        payload = {
            "business_name": "Pixel Forge",
            "bank_account": {
                "account_holder_name": "Pixel Forge",
                "account_number": "123456789012",
                "bank_name": "Maybank",
                "swift_code": "MBBEMYKL",
            },
        }

        response = self.client.post(reverse("seller_apply"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["verification_status"], "PENDING")
        self.assertEqual(response.data["bank_account"]["account_number"], "****9012")

    def test_apply_invalid_swift(self):
        payload = {
            "business_name": "Pixel Forge",
            "bank_account": {
                "account_holder_name": "Pixel Forge",
                "account_number": "123456789012",
                "bank_name": "Maybank",
                "swift_code": "MBB",
            },
        }

        response = self.client.post(reverse("seller_apply"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_connect_then_finalize(self):
        response = self.client.post(reverse("seller_connect_account"), {"business_name": "Pixel Forge"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.post(reverse("seller_finalize"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "onboarding_incomplete")

        container.payment().complete_onboarding(response_account_id(self.user))
        response = self.client.post(reverse("seller_finalize"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["verification_status"], "APPROVED")


def response_account_id(user):
    return SellerProfile.objects.get(user=user).stripe_account_id
