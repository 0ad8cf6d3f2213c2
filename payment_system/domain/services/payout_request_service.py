"""
PayoutRequestService - Seller payout requests and admin review

Sellers withdraw from their balance through payout requests. Every request
passes the approval, cooldown, minimum and balance checks; admins then
approve (balance debited, payout sent asynchronously) or reject it.
"""

import logging
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from authentication.domain.models import SellerProfile
from infrastructure.events import publish_on_commit
from marketplace.ordering.domain.models import Order
from payment_system.domain.events import PayoutProcessedEvent, PayoutRequestedEvent
from payment_system.domain.models import Payout, PayoutRequest
from payment_system.infra.observability import metrics
from utils.service_base import BaseService, ErrorCodes, ServiceError, ServiceResult, service_err, service_ok
from utils.transaction_utils import financial_transaction


logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)

ACTION_APPROVE = "approve"
ACTION_REJECT = "reject"

COOLDOWN_MESSAGE = "Cooldown period has not elapsed since last payout request"


def minimum_payout_amount() -> Decimal:
    return Decimal(str(getattr(settings, "MINIMUM_PAYOUT_AMOUNT", 50)))


def cooldown_period() -> timedelta:
    return timedelta(days=getattr(settings, "PAYOUT_COOLDOWN_DAYS", 7))


def _enqueue_payout(payout_id: str):
    from payment_system.Tasks.payout_tasks import execute_payout_task

    execute_payout_task.delay(payout_id)


class PayoutRequestService(BaseService):
    """
    Service for payout requests.

    Invariants:
    - The seller balance never goes negative (checked under a row lock and
      backed by a database constraint)
    - A request is processed at most once
    - The cooldown runs from the last request, approved or not
    """

    def _cooldown_reference(self, profile: SellerProfile) -> datetime:
        latest = PayoutRequest.objects.filter(seller_profile=profile).order_by("-created_at").first()
        if latest is not None:
            return latest.created_at
        return profile.last_payout_date or EPOCH

    def _in_cooldown(self, profile: SellerProfile) -> bool:
        return self._cooldown_reference(profile) + cooldown_period() > timezone.now()

    @BaseService.log_performance
    def create_payout_request(self, user, total_amount) -> ServiceResult[PayoutRequest]:
        """
        Request a payout of ``total_amount`` from the seller's balance.

        Checks run in order: profile exists, seller approved, cooldown
        elapsed, minimum amount, available balance.
        """
        profile = SellerProfile.objects.filter(user=user).first()
        if profile is None:
            return service_err(ErrorCodes.NOT_FOUND, "Seller profile not found")

        if not profile.is_approved:
            return service_err(ErrorCodes.SELLER_NOT_APPROVED, "Seller account is not approved")

        if self._in_cooldown(profile):
            metrics.payout_requests_total.labels(result=ErrorCodes.COOLDOWN_ACTIVE).inc()
            return service_err(ErrorCodes.COOLDOWN_ACTIVE, COOLDOWN_MESSAGE)

        try:
            amount = Decimal(str(total_amount))
        except InvalidOperation:
            return service_err(ErrorCodes.INVALID_INPUT, "Amount must be a number")

        minimum = minimum_payout_amount()
        if amount < minimum:
            metrics.payout_requests_total.labels(result="below_minimum").inc()
            return service_err(ErrorCodes.BELOW_MINIMUM, f"Minimum payout amount is ${minimum:g}")

        try:
            payout_request = self._store_request(profile.pk, amount)
        except ServiceError as e:
            metrics.payout_requests_total.labels(result=e.code).inc()
            return e.to_result()

        metrics.payout_requests_total.labels(result="created").inc()
        self.logger.info(f"Payout request {payout_request.id} for {amount} created by seller {user.pk}")
        return service_ok(payout_request)

    @financial_transaction
    def _store_request(self, profile_id, amount: Decimal) -> PayoutRequest:
        profile = SellerProfile.objects.select_for_update().get(pk=profile_id)
        # Concurrent requests serialize on the profile lock; only the first may pass
        if self._in_cooldown(profile):
            raise ServiceError(ErrorCodes.COOLDOWN_ACTIVE, COOLDOWN_MESSAGE)
        if amount > profile.balance:
            raise ServiceError(ErrorCodes.INSUFFICIENT_BALANCE, "Requested amount exceeds available balance")

        payout_request = PayoutRequest.objects.create(
            seller_profile=profile,
            total_amount=amount,
            status=PayoutRequest.STATUS_PENDING,
            last_payout_date=profile.last_payout_date,
        )
        profile.last_payout_date = timezone.now()
        profile.save(update_fields=["last_payout_date", "updated_at"])

        publish_on_commit(
            PayoutRequestedEvent(
                payout_request_id=str(payout_request.id), seller_id=str(profile.user_id), amount=amount
            )
        )
        return payout_request

    def get_seller_balance(self, user) -> ServiceResult[Dict[str, Any]]:
        profile = SellerProfile.objects.filter(user=user).only("balance", "last_payout_date").first()
        if profile is None:
            return service_err(ErrorCodes.NOT_FOUND, "Seller profile not found")
        return service_ok({"balance": profile.balance, "last_payout_request_date": profile.last_payout_date})

    def get_payout_request(self, payout_request_id) -> ServiceResult[Dict[str, Any]]:
        """Request with the seller profile, its bank account and the seller's paid orders."""
        payout_request = (
            PayoutRequest.objects.select_related("seller_profile__user", "seller_profile__bank_account")
            .filter(id=payout_request_id)
            .first()
        )
        if payout_request is None:
            return service_err(ErrorCodes.NOT_FOUND, "Payout request not found")

        profile = payout_request.seller_profile
        orders = (
            Order.objects.select_related("code_repo")
            .filter(code_repo__user_id=profile.user_id, status=Order.STATUS_SUCCEEDED, deleted_at__isnull=True)
            .order_by("-created_at")
        )
        return service_ok(
            {
                "payout_request": payout_request,
                "seller_profile": profile,
                "bank_account": getattr(profile, "bank_account", None),
                "orders": list(orders),
            }
        )

    def get_payout_requests_by_user(self, user) -> ServiceResult[List[PayoutRequest]]:
        requests = PayoutRequest.objects.filter(seller_profile__user=user).order_by("-created_at")
        return service_ok(list(requests))

    def get_paginated_payout_requests(self, page: int = 1, limit: int = 20) -> ServiceResult[Dict[str, Any]]:
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or 20), 1), 100)

        queryset = PayoutRequest.objects.select_related("seller_profile__user").order_by("-created_at")
        offset = (page - 1) * limit
        return service_ok(
            {
                "data": list(queryset[offset : offset + limit]),
                "meta": {"total": queryset.count(), "page": page, "limit": limit},
            }
        )

    def get_all_payout_requests(self) -> ServiceResult[List[PayoutRequest]]:
        requests = (
            PayoutRequest.objects.select_related("seller_profile__user")
            .filter(seller_profile__verification_status=SellerProfile.STATUS_APPROVED)
            .order_by("-created_at")
        )
        return service_ok(list(requests))

    @BaseService.log_performance
    def update_payout_request(self, payout_request_id, status: str) -> ServiceResult[PayoutRequest]:
        valid = {choice for choice, _ in PayoutRequest.STATUS_CHOICES}
        if status not in valid:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid status. Must be one of: {', '.join(sorted(valid))}")

        payout_request = PayoutRequest.objects.filter(id=payout_request_id).first()
        if payout_request is None:
            return service_err(ErrorCodes.NOT_FOUND, "Payout request not found")
        if payout_request.status == PayoutRequest.STATUS_PROCESSED:
            return service_err(ErrorCodes.INVALID_STATE, "Processed payout requests cannot be changed")

        payout_request.status = status
        payout_request.save(update_fields=["status", "updated_at"])
        return service_ok(payout_request)

    @BaseService.log_performance
    def delete_payout_request(self, payout_request_id) -> ServiceResult[None]:
        payout_request = PayoutRequest.objects.filter(id=payout_request_id).first()
        if payout_request is None:
            return service_err(ErrorCodes.NOT_FOUND, "Payout request not found")
        if payout_request.status == PayoutRequest.STATUS_PROCESSED:
            return service_err(ErrorCodes.INVALID_STATE, "Processed payout requests cannot be deleted")

        payout_request.delete()
        return service_ok(None)

    @BaseService.log_performance
    def process_payout_request(self, payout_request_id, action: str, admin, note: str = "") -> ServiceResult[PayoutRequest]:
        """
        Approve or reject a pending request.

        Approval debits the seller, creates a PENDING Payout and, once the
        transaction commits, hands the transfer to Celery.
        """
        if action not in (ACTION_APPROVE, ACTION_REJECT):
            return service_err(ErrorCodes.INVALID_INPUT, "Action must be 'approve' or 'reject'")

        try:
            payout_request, payout = self._apply_decision(payout_request_id, action, admin, note or "")
        except ServiceError as e:
            return e.to_result()

        self.logger.info(f"Payout request {payout_request.id} {payout_request.status} by admin {admin.pk}")
        return service_ok(payout_request)

    @financial_transaction
    def _apply_decision(self, payout_request_id, action: str, admin, note: str):
        payout_request = PayoutRequest.objects.select_for_update().filter(id=payout_request_id).first()
        if payout_request is None:
            raise ServiceError(ErrorCodes.NOT_FOUND, "Payout request not found")
        if payout_request.status != PayoutRequest.STATUS_PENDING:
            raise ServiceError(ErrorCodes.INVALID_STATE, f"Payout request is already {payout_request.status}")

        profile = SellerProfile.objects.select_for_update().get(pk=payout_request.seller_profile_id)
        now = timezone.now()
        payout = None

        if action == ACTION_APPROVE:
            if profile.balance < payout_request.total_amount:
                raise ServiceError(ErrorCodes.INSUFFICIENT_BALANCE, "Seller balance no longer covers this payout")

            payout = Payout.objects.create(
                seller_profile=profile,
                payout_request=payout_request,
                total_amount=payout_request.total_amount,
                currency=settings.PAYOUT_CURRENCY,
                status=Payout.STATUS_PENDING,
            )
            SellerProfile.objects.filter(pk=profile.pk).update(
                balance=F("balance") - payout_request.total_amount, last_payout_date=now
            )
            payout_request.status = PayoutRequest.STATUS_PROCESSED
            metrics.payout_volume_total.labels(currency=payout.currency, status="approved").inc(
                float(payout.total_amount)
            )
            transaction.on_commit(lambda: _enqueue_payout(str(payout.id)))
        else:
            payout_request.status = PayoutRequest.STATUS_REJECTED

        payout_request.processed_at = now
        payout_request.processed_by = admin
        payout_request.admin_note = note
        payout_request.save(update_fields=["status", "processed_at", "processed_by", "admin_note", "updated_at"])

        publish_on_commit(
            PayoutProcessedEvent(
                payout_request_id=str(payout_request.id),
                seller_id=str(profile.user_id),
                status=payout_request.status,
                payout_id=str(payout.id) if payout else None,
            )
        )
        return payout_request, payout
