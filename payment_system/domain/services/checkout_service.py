"""
CheckoutService - Payment intents and order confirmation

Creates the provider payment intent for a repository purchase and, once the
provider reports it as succeeded, records the order, credits the seller,
updates the sales aggregate and grants access in a single transaction.
"""

import logging
from typing import Any, Dict, Tuple

from django.conf import settings
from django.db.models import F

from authentication.domain.models import SellerProfile
from authentication.infra.observability.tracing import get_tracer
from infrastructure.events import publish_on_commit
from infrastructure.payments.interface import PaymentException, PaymentIntent, PaymentStatus
from marketplace.catalog.domain.models import CodeRepo
from marketplace.ordering.domain.models import Order
from payment_system.domain.events import OrderPaidEvent
from payment_system.infra.observability import metrics
from utils.service_base import BaseService, ErrorCodes, ServiceError, ServiceResult, service_err, service_ok
from utils.transaction_utils import TransactionError, financial_transaction


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

REQUIRED_METADATA = ("seller_id", "repo_id", "user_id")


class CheckoutService(BaseService):
    """
    Service for the checkout pipeline.

    Responsibilities:
    - Create payment intents for repository purchases
    - Confirm succeeded intents exactly once (idempotent on the intent id)

    Dependencies:
    - payment_provider: PaymentProviderInterface
    - access_service: grants the buyer access to the repository
    - sales_service: keeps the seller's daily sales aggregate
    """

    def __init__(self, payment_provider, access_service, sales_service):
        super().__init__()
        self.payment_provider = payment_provider
        self.access_service = access_service
        self.sales_service = sales_service

    @BaseService.log_performance
    def init_checkout(self, user, repo_id) -> ServiceResult[Dict[str, str]]:
        """
        Start a purchase.

        Args:
            user: Buyer
            repo_id: Repository being bought

        Returns:
            ServiceResult with ``client_secret`` and ``payment_intent_id``
        """
        repo = CodeRepo.objects.filter(id=repo_id, deleted_at__isnull=True).first()
        if repo is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Repository not found")

        if repo.user_id == user.pk:
            return service_err(ErrorCodes.INVALID_OPERATION, "You cannot buy your own repository")

        if not SellerProfile.objects.filter(user_id=repo.user_id).exists():
            return service_err(ErrorCodes.INVALID_OPERATION, "Repository owner is not a seller")

        if self.access_service.can_view_source(user, repo):
            return service_err(ErrorCodes.ALREADY_PURCHASED, "You already own this repository")

        currency = settings.CHECKOUT_CURRENCY
        try:
            intent = self.payment_provider.create_payment_intent(
                amount=repo.price,
                currency=currency,
                metadata={"repo_id": str(repo.id), "seller_id": str(repo.user_id), "user_id": str(user.pk)},
                customer_email=user.email,
            )
        except PaymentException as e:
            self.logger.error(f"Payment intent creation failed for repo {repo.id}: {e}")
            return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, str(e))

        metrics.checkouts_initiated_total.labels(currency=currency).inc()
        self.logger.info(f"Checkout started: intent {intent.intent_id} for repo {repo.id} by user {user.pk}")
        return service_ok({"client_secret": intent.client_secret, "payment_intent_id": intent.intent_id})

    def get_payment_intent(self, intent_id: str) -> ServiceResult[PaymentIntent]:
        try:
            return service_ok(self.payment_provider.retrieve_payment_intent(intent_id))
        except PaymentException as e:
            return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, str(e))

    @BaseService.log_performance
    def process_payment(self, intent_id: str) -> ServiceResult[Dict[str, Any]]:
        """
        Confirm a succeeded payment intent.

        Either every effect lands (order, seller credit, sales aggregate,
        access grant) or none does. A second call for the same intent
        returns the existing order without crediting again.

        Returns:
            ServiceResult with ``{"success": True, "order_id": ...}``
        """
        with tracer.start_as_current_span("checkout_process_payment") as span:
            span.set_attribute("payment.intent_id", intent_id)

            try:
                intent = self.payment_provider.retrieve_payment_intent(intent_id)
            except PaymentException as e:
                self.logger.error(f"Could not retrieve payment intent {intent_id}: {e}")
                return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, str(e))

            if intent.status != PaymentStatus.SUCCEEDED:
                metrics.payment_volume_total.labels(currency=intent.currency, status=intent.status.value).inc()
                return service_err(
                    ErrorCodes.PAYMENT_NOT_SUCCEEDED, f"Payment intent {intent_id} is {intent.raw_status}"
                )

            try:
                with metrics.payment_processing_seconds.time():
                    order, created = self._record_payment(intent)
            except ServiceError as e:
                span.set_attribute("payment.error", e.code)
                return e.to_result()
            except TransactionError as e:
                # A concurrent confirmation may have won the unique intent id
                order = Order.objects.filter(stripe_payment_intent_id=intent_id).first()
                if order is None:
                    self.logger.error(f"Payment {intent_id} could not be recorded: {e}")
                    return service_err(ErrorCodes.DATABASE_ERROR, str(e))
                created = False

            span.set_attribute("order.id", str(order.id))
            span.set_attribute("order.created", created)
            if created:
                metrics.payment_volume_total.labels(currency=intent.currency, status="succeeded").inc(
                    float(intent.amount)
                )
            return service_ok({"success": True, "order_id": str(order.id)})

    @financial_transaction
    def _record_payment(self, intent: PaymentIntent) -> Tuple[Order, bool]:
        existing = Order.objects.filter(stripe_payment_intent_id=intent.intent_id).first()
        if existing is not None:
            self.logger.info(f"Payment intent {intent.intent_id} already recorded as order {existing.id}")
            return existing, False

        metadata = intent.metadata or {}
        missing = [key for key in REQUIRED_METADATA if not metadata.get(key)]
        if missing:
            raise ServiceError(
                ErrorCodes.INVALID_PAYMENT_DATA, f"Payment intent metadata is missing: {', '.join(missing)}"
            )

        repo = CodeRepo.objects.filter(id=metadata["repo_id"]).first()
        if repo is None:
            raise ServiceError(ErrorCodes.PRODUCT_NOT_FOUND, f"Repository {metadata['repo_id']} not found")

        profile = (
            SellerProfile.objects.select_for_update().select_related("user").filter(user_id=metadata["seller_id"]).first()
        )
        if profile is None:
            raise ServiceError(ErrorCodes.SELLER_NOT_FOUND, f"No seller profile for user {metadata['seller_id']}")

        order = Order.objects.create(
            user_id=metadata["user_id"],
            code_repo=repo,
            status=Order.STATUS_SUCCEEDED,
            total_amount=intent.amount,
            stripe_payment_intent_id=intent.intent_id,
        )

        SellerProfile.objects.filter(pk=profile.pk).update(balance=F("balance") + intent.amount)
        self.sales_service.update_sales_aggregate(profile.user, intent.amount)

        access = self.access_service.grant_access(order)
        if not access.ok:
            raise ServiceError(access.error, access.error_detail)

        publish_on_commit(
            OrderPaidEvent(
                order_id=str(order.id),
                user_id=str(order.user_id),
                seller_id=str(profile.user_id),
                repo_id=str(repo.id),
                amount=intent.amount,
                currency=intent.currency,
            )
        )
        self.logger.info(f"Order {order.id} recorded for intent {intent.intent_id}, seller {profile.user_id} credited")
        return order, True
