"""
Tests for UserService
"""

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from authentication.domain.services.user_service import UserService
from authentication.models import Profile, SellerProfile
from authentication.tests.factories import ProfileFactory, SellerProfileFactory, UserFactory
from utils.service_base import ErrorCodes


User = get_user_model()


class CreateUserTest(TestCase):
    def setUp(self):
        self.service = UserService()

    def test_create_user_with_role(self):
        result = self.service.create_user("Mod@Example.com", "mod", "Very-Strong-Pass-91", role="moderator")

        self.assertTrue(result.success)
        user = User.objects.get(email="mod@example.com")
        self.assertEqual(user.role, "moderator")
        self.assertTrue(user.is_email_verified)
        self.assertTrue(user.check_password("Very-Strong-Pass-91"))
        self.assertTrue(Profile.objects.filter(user=user).exists())

    def test_create_seller_gets_approved_profile(self):
        result = self.service.create_user("shop@example.com", "shop", "Very-Strong-Pass-91", role="seller")

        profile = SellerProfile.objects.get(user=result.data["user"])
        self.assertEqual(profile.verification_status, SellerProfile.STATUS_APPROVED)
        self.assertIsNotNone(profile.verification_date)
        self.assertTrue(result.data["user"].is_seller_verified)

    def test_create_user_invalid_role(self):
        result = self.service.create_user("x@example.com", "x", "Very-Strong-Pass-91", role="owner")

        self.assertEqual(result.error_code, ErrorCodes.VALIDATION_ERROR)
        self.assertFalse(User.objects.filter(email="x@example.com").exists())

    def test_create_user_duplicate_email(self):
        UserFactory(email="taken@example.com")

        result = self.service.create_user("TAKEN@example.com", "again", "Very-Strong-Pass-91")

        self.assertEqual(result.error_code, ErrorCodes.EMAIL_EXISTS)


class UserQueriesTest(TestCase):
    def setUp(self):
        self.service = UserService()
        self.users = [UserFactory() for _ in range(3)]
        self.deleted = UserFactory(deleted_at=timezone.now())

    def test_all_users_skip_deleted(self):
        result = self.service.get_all_users()

        ids = {user.id for user in result.data["users"]}
        self.assertEqual(ids, {user.id for user in self.users})

    def test_paginated_users(self):
        result = self.service.get_paginated_users(page=2, limit=2)

        self.assertEqual(len(result.data["data"]), 1)
        self.assertEqual(result.data["meta"], {"total": 3, "page": 2, "limit": 2})

    def test_get_user_by_email_is_case_insensitive(self):
        user = self.users[0]

        result = self.service.get_user_by_email(user.email.upper())

        self.assertEqual(result.data["user"], user)

    def test_deleted_user_not_found(self):
        result = self.service.get_user_by_email(self.deleted.email)

        self.assertEqual(result.error_code, ErrorCodes.NOT_FOUND)


class UpdateUserTest(TestCase):
    def setUp(self):
        self.service = UserService()
        self.user = UserFactory(email="member@example.com")

    def test_update_role_and_password(self):
        result = self.service.update_user("member@example.com", {"role": "moderator", "password": "An0ther-Pass!"})

        self.assertTrue(result.success)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, "moderator")
        self.assertTrue(self.user.check_password("An0ther-Pass!"))

    def test_update_email_to_taken_address(self):
        UserFactory(email="other@example.com")

        result = self.service.update_user("member@example.com", {"email": "other@example.com"})

        self.assertEqual(result.error_code, ErrorCodes.EMAIL_EXISTS)
        self.user.refresh_from_db()
        self.assertEqual(self.user.email, "member@example.com")

    def test_update_invalid_role(self):
        result = self.service.update_user("member@example.com", {"role": "owner"})

        self.assertEqual(result.error_code, ErrorCodes.VALIDATION_ERROR)

    def test_update_unknown_user(self):
        result = self.service.update_user("ghost@example.com", {"username": "ghost"})

        self.assertEqual(result.error_code, ErrorCodes.NOT_FOUND)

    def test_update_profile_name(self):
        ProfileFactory(user=self.user, name="Old Name")

        result = self.service.update_user_profile("member@example.com", {"fullname": "New Name"})

        self.assertTrue(result.success)
        self.assertEqual(Profile.objects.get(user=self.user).name, "New Name")

    def test_update_seller_business_details(self):
        profile = SellerProfileFactory(business_name="Old Shop")

        result = self.service.update_user_profile(
            profile.user.email, {"business_name": "New Shop", "business_phone": "+60123456789", "fullname": "x"}
        )

        self.assertTrue(result.success)
        profile.refresh_from_db()
        self.assertEqual(profile.business_name, "New Shop")
        self.assertEqual(profile.business_phone, "+60123456789")


class DeleteUserTest(TestCase):
    def setUp(self):
        self.service = UserService()
        self.user = UserFactory(email="leaving@example.com")

    def test_soft_delete(self):
        result = self.service.delete_user("leaving@example.com")

        self.assertTrue(result.success)
        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.deleted_at)
        self.assertFalse(self.user.is_active)
        self.assertTrue(User.objects.filter(pk=self.user.pk).exists())

    def test_delete_twice(self):
        self.service.delete_user("leaving@example.com")

        result = self.service.delete_user("leaving@example.com")

        self.assertEqual(result.error_code, ErrorCodes.NOT_FOUND)
