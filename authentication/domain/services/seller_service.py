"""
SellerService - Seller Application Business Logic.

Seller applications, admin review, bank accounts and identity documents.
"""

import logging
import uuid
from typing import Any, Dict, Optional

import magic
from django.db import transaction

from authentication.domain.events import SellerApplicationSubmittedEvent, SellerStatusChangedEvent
from authentication.infra.observability import metrics
from authentication.models import BankAccount, CustomUser, SellerProfile
from infrastructure.events import publish_on_commit
from infrastructure.storage import StorageException, StorageInterface
from utils.service_base import ErrorCodes

from .results import Result


logger = logging.getLogger(__name__)

SELLER_PROFILE_FIELDS = (
    "business_name",
    "business_address",
    "business_phone",
    "business_email",
    "business_type",
    "profile_img",
)
BANK_ACCOUNT_FIELDS = ("account_holder_name", "account_number", "bank_name", "swift_code", "iban", "routing_number")
REQUIRED_BANK_FIELDS = ("account_holder_name", "account_number", "bank_name", "swift_code")

IDENTITY_DOC_MIME = "application/pdf"
IDENTITY_DOC_MAX_SIZE = 10 * 1024 * 1024


def _not_found() -> Result:
    return Result(
        success=False,
        message="Seller profile not found",
        error="Seller profile not found",
        error_code=ErrorCodes.SELLER_NOT_FOUND,
    )


def _invalid(message: str) -> Result:
    return Result(success=False, message=message, error=message, error_code=ErrorCodes.VALIDATION_ERROR)


class SellerService:
    """
    Seller application service encapsulating seller workflow business logic.
    """

    def __init__(self, storage: StorageInterface):
        """
        Args:
            storage: Storage backend for identity documents
        """
        self.storage = storage

    def apply_for_seller_account(self, user, application_data: Dict[str, Any]) -> Result:
        """
        Submit (or resubmit) a seller application.

        Business Logic:
        1. Validate the business fields and bank account
        2. Upsert the seller profile and move it to PENDING
        3. Upsert the bank account

        Args:
            user: CustomUser instance
            application_data: Dict with the seller profile fields and a
                ``bank_account`` dict

        Returns:
            Result with the seller profile in ``data``
        """
        if not application_data.get("business_name"):
            return _invalid("business_name is required")

        bank_data = application_data.get("bank_account") or {}
        bank_error = self._validate_bank_account(bank_data, partial=False)
        if bank_error:
            return _invalid(bank_error)

        with transaction.atomic():
            profile, created = SellerProfile.objects.select_for_update().get_or_create(
                user=user, defaults={"business_name": application_data["business_name"]}
            )
            for field in SELLER_PROFILE_FIELDS:
                if field in application_data:
                    setattr(profile, field, application_data[field])
            profile.set_verification_status(SellerProfile.STATUS_PENDING)
            profile.save()

            self._upsert_bank_account(profile, bank_data)
            publish_on_commit(SellerApplicationSubmittedEvent(seller_profile_id=str(profile.id), user_id=str(user.id)))

        metrics.seller_applications_total.inc()
        logger.info(f"Seller application {'created' if created else 'resubmitted'} for user {user.id}")
        return Result(success=True, message="Seller application submitted", data={"seller_profile": profile})

    def get_seller_profile(self, user) -> Result:
        profile = SellerProfile.objects.select_related("bank_account").filter(user=user).first()
        if profile is None:
            return _not_found()
        return Result(success=True, data={"seller_profile": profile})

    def update_seller_profile(self, user, profile_data: Dict[str, Any]) -> Result:
        """Partial update; a ``bank_account`` dict is upserted alongside."""
        bank_data = profile_data.get("bank_account")
        if bank_data:
            bank_error = self._validate_bank_account(bank_data, partial=True)
            if bank_error:
                return _invalid(bank_error)

        status = profile_data.get("verification_status")
        if status and status not in dict(SellerProfile.VERIFICATION_STATUS_CHOICES):
            return _invalid(f"Invalid verification status: {status}")

        with transaction.atomic():
            profile = SellerProfile.objects.select_for_update().filter(user=user).first()
            if profile is None:
                return _not_found()

            for field in SELLER_PROFILE_FIELDS:
                if field in profile_data:
                    setattr(profile, field, profile_data[field])
            if status:
                profile.set_verification_status(status)
            profile.save()

            if bank_data:
                if not hasattr(profile, "bank_account"):
                    bank_error = self._validate_bank_account(bank_data, partial=False)
                    if bank_error:
                        transaction.set_rollback(True)
                        return _invalid(bank_error)
                self._upsert_bank_account(profile, bank_data)

        return Result(success=True, message="Seller profile updated", data={"seller_profile": profile})

    def get_seller_applications(self, status: Optional[str] = None) -> Result:
        """Admin listing of seller profiles, optionally filtered by status."""
        queryset = SellerProfile.objects.select_related("user", "bank_account").order_by("-created_at")
        if status:
            queryset = queryset.filter(verification_status=status)
        return Result(success=True, data={"applications": list(queryset)})

    @transaction.atomic
    def update_seller_application_status(self, profile_id, status: str) -> Result:
        """
        Admin decision on an application.

        APPROVED promotes the user to a verified seller; REJECTED clears the
        seller verification flag.
        """
        if status not in dict(SellerProfile.VERIFICATION_STATUS_CHOICES):
            return _invalid(f"Invalid verification status: {status}")

        profile = SellerProfile.objects.select_for_update().select_related("user").filter(id=profile_id).first()
        if profile is None:
            return _not_found()

        profile.set_verification_status(status)
        profile.save(update_fields=["verification_status", "verification_date", "updated_at"])

        user = profile.user
        if status == SellerProfile.STATUS_APPROVED:
            user.role = CustomUser.ROLE_SELLER
            user.is_seller_verified = True
            user.save(update_fields=["role", "is_seller_verified", "updated_at"])
        elif status == SellerProfile.STATUS_REJECTED:
            user.is_seller_verified = False
            user.save(update_fields=["is_seller_verified", "updated_at"])

        publish_on_commit(
            SellerStatusChangedEvent(seller_profile_id=str(profile.id), user_id=str(user.id), status=status)
        )
        metrics.record_seller_status(status)
        logger.info(f"Seller application {profile.id} set to {status}")
        return Result(success=True, message=f"Application {status.lower()}", data={"seller_profile": profile})

    def upload_identity_document(self, user, uploaded_file) -> Result:
        """
        Store a PDF identity document and put the application back to PENDING.

        The content type is sniffed from the file header, not trusted from
        the upload.
        """
        profile = SellerProfile.objects.filter(user=user).first()
        if profile is None:
            return _not_found()

        if uploaded_file is None:
            return _invalid("No file provided")

        if uploaded_file.size > IDENTITY_DOC_MAX_SIZE:
            return Result(
                success=False,
                message="Identity document exceeds 10MB",
                error="File too large",
                error_code=ErrorCodes.INVALID_DOCUMENT,
            )

        uploaded_file.seek(0)
        detected_mime = magic.from_buffer(uploaded_file.read(2048), mime=True)
        uploaded_file.seek(0)
        if detected_mime != IDENTITY_DOC_MIME:
            return Result(
                success=False,
                message="Identity document must be a PDF",
                error=f"Unsupported content type {detected_mime}",
                error_code=ErrorCodes.INVALID_DOCUMENT,
            )

        path = f"identity-docs/{user.id}/{uuid.uuid4().hex}.pdf"
        try:
            stored = self.storage.upload(uploaded_file, path, IDENTITY_DOC_MIME)
        except StorageException as e:
            logger.error(f"Identity document upload failed for user {user.id}: {e}")
            return Result(
                success=False, message="Could not store document", error=str(e), error_code=ErrorCodes.STORAGE_ERROR
            )

        previous_key = profile.identity_doc
        profile.identity_doc = stored.key
        profile.set_verification_status(SellerProfile.STATUS_PENDING)
        profile.save(update_fields=["identity_doc", "verification_status", "verification_date", "updated_at"])

        if previous_key and previous_key != stored.key:
            try:
                self.storage.delete(previous_key)
            except StorageException as e:
                logger.warning(f"Could not delete previous identity document {previous_key}: {e}")

        return Result(success=True, message="Identity document uploaded", data={"key": stored.key})

    def get_identity_document_url(self, user) -> Result:
        profile = SellerProfile.objects.filter(user=user).first()
        if profile is None:
            return _not_found()
        if not profile.identity_doc:
            return Result(
                success=False,
                message="No identity document uploaded",
                error="No identity document uploaded",
                error_code=ErrorCodes.NOT_FOUND,
            )

        try:
            url = self.storage.get_signed_url(profile.identity_doc)
        except StorageException as e:
            logger.error(f"Signed URL generation failed for {profile.identity_doc}: {e}")
            return Result(
                success=False, message="Could not generate URL", error=str(e), error_code=ErrorCodes.STORAGE_ERROR
            )
        return Result(success=True, data={"url": url})

    @staticmethod
    def _validate_bank_account(bank_data: Dict[str, Any], partial: bool) -> Optional[str]:
        if not partial:
            missing = [field for field in REQUIRED_BANK_FIELDS if not bank_data.get(field)]
            if missing:
                return f"Missing bank account fields: {', '.join(missing)}"

        swift_code = bank_data.get("swift_code")
        if swift_code is not None and not 8 <= len(swift_code) <= 11:
            return "swift_code must be 8 to 11 characters"
        return None

    @staticmethod
    def _upsert_bank_account(profile: SellerProfile, bank_data: Dict[str, Any]):
        if not bank_data:
            return None
        values = {field: bank_data[field] for field in BANK_ACCOUNT_FIELDS if field in bank_data}
        bank_account, _ = BankAccount.objects.update_or_create(seller_profile=profile, defaults=values)
        return bank_account
