from django.test import TestCase

from authentication.domain.services.profile_service import ProfileService
from authentication.models import Profile
from authentication.tests.factories import ProfileFactory, UserFactory
from utils.service_base import ErrorCodes


class ProfileServiceTest(TestCase):
    def setUp(self):
        self.service = ProfileService()
        self.user = UserFactory()

    def test_create_profile(self):
        result = self.service.create_profile(self.user, {"name": "Aina", "phone_number": "+60123456789"})

        self.assertTrue(result.success)
        profile = Profile.objects.get(user=self.user)
        self.assertEqual(profile.name, "Aina")
        self.assertEqual(result.data["profile"], profile)

    def test_create_profile_ignores_unknown_fields(self):
        result = self.service.create_profile(self.user, {"name": "Aina", "role": "admin"})

        self.assertTrue(result.success)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, "user")

    def test_create_twice_returns_profile_exists(self):
        ProfileFactory(user=self.user)

        result = self.service.create_profile(self.user, {"name": "Other"})

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.PROFILE_EXISTS)
        self.assertEqual(Profile.objects.filter(user=self.user).count(), 1)

    def test_get_missing_profile(self):
        result = self.service.get_profile(self.user)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.NOT_FOUND)

    def test_update_only_touches_given_fields(self):
        ProfileFactory(user=self.user, name="Aina", phone_number="+60111111111")

        result = self.service.update_profile(self.user, {"phone_number": "+60199999999"})

        self.assertTrue(result.success)
        profile = Profile.objects.get(user=self.user)
        self.assertEqual(profile.name, "Aina")
        self.assertEqual(profile.phone_number, "+60199999999")

    def test_update_missing_profile(self):
        result = self.service.update_profile(self.user, {"name": "Aina"})

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.NOT_FOUND)
