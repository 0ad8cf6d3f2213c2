"""
Tests for SellerService and OnboardingService
"""

from unittest.mock import MagicMock, patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase

from authentication.domain.services.onboarding_service import OnboardingService
from authentication.domain.services.seller_service import SellerService
from authentication.models import BankAccount, SellerProfile
from authentication.tests.factories import BankAccountFactory, SellerProfileFactory, UserFactory
from infrastructure.payments import ConnectedAccount, MockPaymentProvider, PaymentException, PaymentProviderInterface
from infrastructure.storage import StorageFile, StorageInterface
from utils.service_base import ErrorCodes


def application_data(**overrides):
    data = {
        "business_name": "Pixel Forge",
        "business_address": "1 Jalan Ampang",
        "business_type": "company",
        "bank_account": {
            "account_holder_name": "Pixel Forge Sdn Bhd",
            "account_number": "123456789012",
            "bank_name": "Maybank",
            "swift_code": "MBBEMYKL",
        },
    }
    data.update(overrides)
    return data


class SellerApplicationTest(TestCase):
    def setUp(self):
        self.storage = MagicMock(spec=StorageInterface)
        self.service = SellerService(storage=self.storage)
        self.user = UserFactory()

    def test_apply_creates_pending_profile_and_bank_account(self):
        result = self.service.apply_for_seller_account(self.user, application_data())

        self.assertTrue(result.success)
        profile = SellerProfile.objects.get(user=self.user)
        self.assertEqual(profile.verification_status, SellerProfile.STATUS_PENDING)
        self.assertEqual(profile.business_type, "company")
        self.assertEqual(profile.bank_account.swift_code, "MBBEMYKL")

    def test_reapply_updates_existing_profile(self):
        self.service.apply_for_seller_account(self.user, application_data())
        data = application_data(business_name="Pixel Forge Studio")
        data["bank_account"]["bank_name"] = "CIMB"

        result = self.service.apply_for_seller_account(self.user, data)

        self.assertTrue(result.success)
        self.assertEqual(SellerProfile.objects.filter(user=self.user).count(), 1)
        self.assertEqual(BankAccount.objects.count(), 1)
        self.assertEqual(BankAccount.objects.get().bank_name, "CIMB")

    def test_apply_rejects_short_swift_code(self):
        data = application_data()
        data["bank_account"]["swift_code"] = "MBB"

        result = self.service.apply_for_seller_account(self.user, data)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.VALIDATION_ERROR)
        self.assertFalse(SellerProfile.objects.filter(user=self.user).exists())

    def test_apply_requires_bank_account(self):
        result = self.service.apply_for_seller_account(self.user, application_data(bank_account={}))

        self.assertFalse(result.success)
        self.assertIn("bank account", result.error)

    def test_update_profile_approved_stamps_date(self):
        profile = SellerProfileFactory(user=self.user, verification_status=SellerProfile.STATUS_PENDING)

        result = self.service.update_seller_profile(self.user, {"verification_status": SellerProfile.STATUS_APPROVED})

        self.assertTrue(result.success)
        profile.refresh_from_db()
        self.assertIsNotNone(profile.verification_date)

    def test_update_profile_upserts_bank_account(self):
        profile = SellerProfileFactory(user=self.user)
        BankAccountFactory(seller_profile=profile, bank_name="Old Bank")

        result = self.service.update_seller_profile(self.user, {"bank_account": {"bank_name": "New Bank"}})

        self.assertTrue(result.success)
        self.assertEqual(BankAccount.objects.get(seller_profile=profile).bank_name, "New Bank")

    def test_get_seller_profile_missing(self):
        result = self.service.get_seller_profile(self.user)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.SELLER_NOT_FOUND)


class SellerApplicationReviewTest(TestCase):
    def setUp(self):
        self.service = SellerService(storage=MagicMock(spec=StorageInterface))
        self.user = UserFactory()
        self.profile = SellerProfileFactory(user=self.user, verification_status=SellerProfile.STATUS_PENDING)

    def test_list_applications_filtered_by_status(self):
        SellerProfileFactory(verification_status=SellerProfile.STATUS_APPROVED)

        result = self.service.get_seller_applications(SellerProfile.STATUS_PENDING)

        self.assertEqual([p.id for p in result.data["applications"]], [self.profile.id])

    def test_approve_promotes_user(self):
        result = self.service.update_seller_application_status(self.profile.id, SellerProfile.STATUS_APPROVED)

        self.assertTrue(result.success)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, "seller")
        self.assertTrue(self.user.is_seller_verified)

    def test_reject_clears_seller_flag(self):
        self.user.is_seller_verified = True
        self.user.save()

        result = self.service.update_seller_application_status(self.profile.id, SellerProfile.STATUS_REJECTED)

        self.assertTrue(result.success)
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_seller_verified)

    def test_invalid_status(self):
        result = self.service.update_seller_application_status(self.profile.id, "MAYBE")

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.VALIDATION_ERROR)


@patch("authentication.domain.services.seller_service.magic.from_buffer")
class IdentityDocumentTest(TestCase):
    def setUp(self):
        self.storage = MagicMock(spec=StorageInterface)
        self.storage.upload.return_value = StorageFile(key="identity-docs/doc.pdf", size=20, content_type="application/pdf")
        self.service = SellerService(storage=self.storage)
        self.user = UserFactory()
        self.profile = SellerProfileFactory(user=self.user, verification_status=SellerProfile.STATUS_REJECTED)

    def test_upload_pdf(self, mock_from_buffer):
        mock_from_buffer.return_value = "application/pdf"
        upload = SimpleUploadedFile("id.pdf", b"%PDF-1.4 test document", content_type="application/pdf")

        result = self.service.upload_identity_document(self.user, upload)

        self.assertTrue(result.success)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.identity_doc, "identity-docs/doc.pdf")
        self.assertEqual(self.profile.verification_status, SellerProfile.STATUS_PENDING)

    def test_upload_rejects_non_pdf_even_with_pdf_name(self, mock_from_buffer):
        mock_from_buffer.return_value = "image/png"
        upload = SimpleUploadedFile("id.pdf", b"\x89PNG fake", content_type="application/pdf")

        result = self.service.upload_identity_document(self.user, upload)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.INVALID_DOCUMENT)
        self.storage.upload.assert_not_called()

    def test_signed_url(self, mock_from_buffer):
        self.profile.identity_doc = "identity-docs/doc.pdf"
        self.profile.save()
        self.storage.get_signed_url.return_value = "https://signed.example/doc.pdf"

        result = self.service.get_identity_document_url(self.user)

        self.assertTrue(result.success)
        self.assertEqual(result.data["url"], "https://signed.example/doc.pdf")
        self.storage.get_signed_url.assert_called_once_with("identity-docs/doc.pdf")


class OnboardingServiceTest(TestCase):
    def setUp(self):
        self.provider = MockPaymentProvider()
        self.service = OnboardingService(payment_provider=self.provider)
        self.user = UserFactory()

    def test_create_connect_account_creates_profile(self):
        result = self.service.create_connect_account(self.user, "Pixel Forge", "individual")

        self.assertTrue(result.success)
        profile = SellerProfile.objects.get(user=self.user)
        self.assertEqual(profile.stripe_account_id, result.data["account_id"])
        self.assertIn(result.data["account_id"], result.data["onboarding_url"])

    def test_create_connect_account_provider_error(self):
        provider = MagicMock(spec=PaymentProviderInterface)
        provider.create_connect_account.side_effect = PaymentException("boom")
        service = OnboardingService(payment_provider=provider)

        result = service.create_connect_account(self.user, "Pixel Forge")

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.PAYMENT_PROVIDER_ERROR)
        self.assertFalse(SellerProfile.objects.filter(user=self.user).exists())

    def test_onboarding_complete_sets_status(self):
        account_id = self.service.create_connect_account(self.user, "Pixel Forge").data["account_id"]

        self.service.handle_onboarding_complete(account_id)
        self.assertEqual(SellerProfile.objects.get(user=self.user).verification_status, SellerProfile.STATUS_PENDING)

        self.provider.complete_onboarding(account_id)
        self.service.handle_onboarding_complete(account_id)
        profile = SellerProfile.objects.get(user=self.user)
        self.assertEqual(profile.verification_status, SellerProfile.STATUS_APPROVED)
        self.assertIsNotNone(profile.verification_date)

    def test_verify_account_status(self):
        self.assertEqual(
            self.service.verify_account_status(self.user).data, {"is_verified": False, "account_status": "pending"}
        )

        account_id = self.service.create_connect_account(self.user, "Pixel Forge").data["account_id"]
        self.provider.complete_onboarding(account_id)

        self.assertEqual(
            self.service.verify_account_status(self.user).data, {"is_verified": True, "account_status": "active"}
        )

    def test_finalize_requires_complete_onboarding(self):
        self.service.create_connect_account(self.user, "Pixel Forge")

        result = self.service.finalize_seller(self.user)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCodes.ONBOARDING_INCOMPLETE)

    def test_finalize_seller(self):
        provider = MagicMock(spec=PaymentProviderInterface)
        provider.retrieve_account.return_value = ConnectedAccount(
            account_id="acct_ready", details_submitted=True, charges_enabled=True, payouts_enabled=True
        )
        SellerProfileFactory(user=self.user, stripe_account_id="acct_ready", verification_status="PENDING")

        result = OnboardingService(payment_provider=provider).finalize_seller(self.user)

        self.assertTrue(result.success)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, "seller")
        self.assertTrue(self.user.is_seller_verified)
        self.assertEqual(SellerProfile.objects.get(user=self.user).verification_status, "APPROVED")
