"""
OnboardingService - Payment-provider onboarding for sellers.

Creates the seller's connected account, tracks the hosted onboarding flow and
finalizes the seller once the provider reports the account ready.
"""

import logging

from django.conf import settings
from django.db import transaction

from authentication.domain.events import SellerStatusChangedEvent
from authentication.infra.observability import metrics
from authentication.models import CustomUser, SellerProfile
from infrastructure.events import publish_on_commit
from infrastructure.payments import PaymentException, PaymentProviderInterface
from utils.service_base import ErrorCodes

from .results import Result


logger = logging.getLogger(__name__)


class OnboardingService:
    def __init__(self, payment_provider: PaymentProviderInterface):
        self.payment_provider = payment_provider

    def create_connect_account(self, user, business_name: str, business_type: str = "individual") -> Result:
        """
        Create a connected account and return the hosted onboarding link.

        The seller profile is created when missing, otherwise its
        ``stripe_account_id`` is replaced.
        """
        if not business_name:
            return Result(
                success=False,
                message="business_name is required",
                error="business_name is required",
                error_code=ErrorCodes.VALIDATION_ERROR,
            )

        try:
            account = self.payment_provider.create_connect_account(
                email=user.email, business_name=business_name, business_type=business_type
            )
            onboarding_url = self.payment_provider.create_account_link(
                account.account_id,
                refresh_url=f"{settings.FRONTEND_URL}/seller/onboarding/refresh",
                return_url=f"{settings.FRONTEND_URL}/seller/onboarding/complete",
            )
        except PaymentException as e:
            logger.error(f"Connect account creation failed for user {user.id}: {e}")
            return Result(
                success=False,
                message="Payment provider error",
                error=str(e),
                error_code=ErrorCodes.PAYMENT_PROVIDER_ERROR,
            )

        with transaction.atomic():
            profile, _ = SellerProfile.objects.select_for_update().get_or_create(
                user=user, defaults={"business_name": business_name, "business_type": business_type}
            )
            profile.business_name = business_name
            profile.business_type = business_type
            profile.stripe_account_id = account.account_id
            profile.save(update_fields=["business_name", "business_type", "stripe_account_id", "updated_at"])

        logger.info(f"Connected account {account.account_id} created for user {user.id}")
        return Result(
            success=True,
            message="Connected account created",
            data={"account_id": account.account_id, "onboarding_url": onboarding_url},
        )

    @transaction.atomic
    def handle_onboarding_complete(self, account_id: str) -> Result:
        """Sync the seller status from the provider (Connect ``account.updated``)."""
        profile = SellerProfile.objects.select_for_update().filter(stripe_account_id=account_id).first()
        if profile is None:
            return Result(
                success=False,
                message="No seller profile for account",
                error=f"No seller profile for account {account_id}",
                error_code=ErrorCodes.SELLER_NOT_FOUND,
            )

        try:
            account = self.payment_provider.retrieve_account(account_id)
        except PaymentException as e:
            logger.error(f"Could not retrieve connected account {account_id}: {e}")
            return Result(
                success=False,
                message="Payment provider error",
                error=str(e),
                error_code=ErrorCodes.PAYMENT_PROVIDER_ERROR,
            )

        status = SellerProfile.STATUS_APPROVED if account.details_submitted else SellerProfile.STATUS_PENDING
        if profile.verification_status != status:
            profile.set_verification_status(status)
            profile.save(update_fields=["verification_status", "verification_date", "updated_at"])
            publish_on_commit(
                SellerStatusChangedEvent(seller_profile_id=str(profile.id), user_id=str(profile.user_id), status=status)
            )
            metrics.record_seller_status(status)

        return Result(success=True, data={"verification_status": status})

    def verify_account_status(self, user) -> Result:
        profile = SellerProfile.objects.filter(user=user).first()
        if profile is None or not profile.stripe_account_id:
            return Result(success=True, data={"is_verified": False, "account_status": "pending"})

        try:
            account = self.payment_provider.retrieve_account(profile.stripe_account_id)
        except PaymentException as e:
            logger.error(f"Could not retrieve connected account {profile.stripe_account_id}: {e}")
            return Result(
                success=False,
                message="Payment provider error",
                error=str(e),
                error_code=ErrorCodes.PAYMENT_PROVIDER_ERROR,
            )

        is_verified = account.is_fully_onboarded
        return Result(
            success=True,
            data={"is_verified": is_verified, "account_status": "active" if is_verified else "pending"},
        )

    @transaction.atomic
    def finalize_seller(self, user) -> Result:
        """
        Promote the user to a verified seller once onboarding is complete.
        """
        profile = SellerProfile.objects.select_for_update().filter(user=user).first()
        if profile is None or not profile.stripe_account_id:
            return Result(
                success=False,
                message="Seller profile not found",
                error="Seller profile not found",
                error_code=ErrorCodes.SELLER_NOT_FOUND,
            )

        try:
            account = self.payment_provider.retrieve_account(profile.stripe_account_id)
        except PaymentException as e:
            logger.error(f"Could not retrieve connected account {profile.stripe_account_id}: {e}")
            return Result(
                success=False,
                message="Payment provider error",
                error=str(e),
                error_code=ErrorCodes.PAYMENT_PROVIDER_ERROR,
            )

        if not account.is_fully_onboarded:
            return Result(
                success=False,
                message="Onboarding is not complete",
                error="Onboarding is not complete",
                error_code=ErrorCodes.ONBOARDING_INCOMPLETE,
            )

        locked_user = CustomUser.objects.select_for_update().get(id=user.id)
        locked_user.role = CustomUser.ROLE_SELLER
        locked_user.is_seller_verified = True
        locked_user.save(update_fields=["role", "is_seller_verified", "updated_at"])

        profile.set_verification_status(SellerProfile.STATUS_APPROVED)
        profile.save(update_fields=["verification_status", "verification_date", "updated_at"])

        publish_on_commit(
            SellerStatusChangedEvent(
                seller_profile_id=str(profile.id), user_id=str(user.id), status=SellerProfile.STATUS_APPROVED
            )
        )
        metrics.record_seller_status(SellerProfile.STATUS_APPROVED)
        logger.info(f"Seller finalized: {user.email}")
        return Result(success=True, message="Seller account activated", data={"seller_profile": profile})
