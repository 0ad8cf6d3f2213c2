"""
Dependency Injection Container
================================

Service locator for infrastructure dependencies and the domain services
built on top of them.

Usage:
    from infrastructure.container import container

    payment = container.payment()
    checkout = container.checkout_service()
"""

import logging
from typing import Optional

from .ai import AIFactory, AIProviderInterface
from .email import EmailFactory, EmailServiceInterface
from .events import EventBus, get_event_bus
from .payments import PaymentFactory, PaymentProviderInterface
from .storage import StorageFactory, StorageInterface


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies.

    Lazily creates and caches one instance per service. Singleton.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._services = {}
            self._storage: Optional[StorageInterface] = None
            self._email: Optional[EmailServiceInterface] = None
            self._payment: Optional[PaymentProviderInterface] = None
            self._ai: Optional[AIProviderInterface] = None
            self._initialized = True
            logger.info("Service container initialized")

    # ----- Infrastructure -----

    def storage(self) -> StorageInterface:
        if self._storage is None:
            self._storage = StorageFactory.create()
            logger.debug(f"Created storage service: {type(self._storage).__name__}")
        return self._storage

    def email(self, backend: Optional[str] = None) -> EmailServiceInterface:
        if self._email is None or backend is not None:
            self._email = EmailFactory.create(backend)
            logger.debug(f"Created email service: {type(self._email).__name__}")
        return self._email

    def payment(self, backend: Optional[str] = None) -> PaymentProviderInterface:
        if self._payment is None or backend is not None:
            self._payment = PaymentFactory.create(backend)
            logger.debug(f"Created payment service: {type(self._payment).__name__}")
        return self._payment

    def ai(self, backend: Optional[str] = None) -> AIProviderInterface:
        if self._ai is None or backend is not None:
            self._ai = AIFactory.create(backend)
            logger.debug(f"Created AI provider: {type(self._ai).__name__}")
        return self._ai

    def event_bus(self) -> EventBus:
        return get_event_bus()

    # ----- Domain services -----

    def _cached(self, name, builder):
        if name not in self._services:
            self._services[name] = builder()
            logger.debug(f"Created {name}")
        return self._services[name]

    def auth_service(self):
        from authentication.domain.services.auth_service import AuthService

        return self._cached("auth_service", lambda: AuthService(email_provider=self.email()))

    def user_service(self):
        from authentication.domain.services.user_service import UserService

        return self._cached("user_service", UserService)

    def profile_service(self):
        from authentication.domain.services.profile_service import ProfileService

        return self._cached("profile_service", ProfileService)

    def seller_service(self):
        from authentication.domain.services.seller_service import SellerService

        return self._cached("seller_service", lambda: SellerService(storage=self.storage()))

    def onboarding_service(self):
        from authentication.domain.services.onboarding_service import OnboardingService

        return self._cached("onboarding_service", lambda: OnboardingService(payment_provider=self.payment()))

    def access_service(self):
        from marketplace.ordering.domain.services.access_service import AccessService

        return self._cached("access_service", AccessService)

    def order_service(self):
        from marketplace.ordering.domain.services.order_service import OrderService

        return self._cached("order_service", OrderService)

    def catalog_service(self):
        from marketplace.catalog.domain.services.catalog_service import CatalogService

        return self._cached(
            "catalog_service",
            lambda: CatalogService(payment_provider=self.payment(), access_service=self.access_service()),
        )

    def search_service(self):
        from marketplace.catalog.domain.services.search_service import SearchService

        return self._cached("search_service", SearchService)

    def review_service(self):
        from marketplace.catalog.domain.services.review_service import ReviewService

        return self._cached("review_service", ReviewService)

    def comment_service(self):
        from marketplace.catalog.domain.services.comment_service import CommentService

        return self._cached("comment_service", CommentService)

    def code_check_service(self):
        from marketplace.catalog.domain.services.code_check_service import CodeCheckService

        return self._cached("code_check_service", lambda: CodeCheckService(ai_provider=self.ai()))

    def sales_service(self):
        from payment_system.domain.services.sales_service import SalesService

        return self._cached("sales_service", SalesService)

    def checkout_service(self):
        from payment_system.domain.services.checkout_service import CheckoutService

        return self._cached(
            "checkout_service",
            lambda: CheckoutService(
                payment_provider=self.payment(),
                access_service=self.access_service(),
                sales_service=self.sales_service(),
            ),
        )

    def payout_request_service(self):
        from payment_system.domain.services.payout_request_service import PayoutRequestService

        return self._cached("payout_request_service", PayoutRequestService)

    def payout_service(self):
        from payment_system.domain.services.payout_service import PayoutService

        return self._cached("payout_service", lambda: PayoutService(payment_provider=self.payment()))

    def support_service(self):
        from support.domain.services.support_service import SupportService

        return self._cached("support_service", lambda: SupportService(email_provider=self.email()))

    def admin_dashboard_service(self):
        from dashboards.domain.services.admin_dashboard_service import AdminDashboardService

        return self._cached("admin_dashboard_service", AdminDashboardService)

    def moderator_dashboard_service(self):
        from dashboards.domain.services.moderator_dashboard_service import ModeratorDashboardService

        return self._cached("moderator_dashboard_service", ModeratorDashboardService)

    def seller_dashboard_service(self):
        from dashboards.domain.services.seller_dashboard_service import SellerDashboardService

        return self._cached(
            "seller_dashboard_service", lambda: SellerDashboardService(sales_service=self.sales_service())
        )

    def user_dashboard_service(self):
        from dashboards.domain.services.user_dashboard_service import UserDashboardService

        return self._cached("user_dashboard_service", UserDashboardService)

    def reset(self):
        """Drop every cached instance (tests, environment switches)."""
        self._storage = None
        self._email = None
        self._payment = None
        self._ai = None
        self._services = {}
        logger.info("Service container reset")

    def configure_for_testing(self):
        """Wire in-process doubles for every external collaborator."""
        self.reset()
        self._storage = StorageFactory.create("local")
        self._email = EmailFactory.create("mock")
        self._payment = PaymentFactory.create("mock")
        self._ai = AIFactory.create("mock")
        logger.info("Service container configured for testing")


# Global singleton instance
container = ServiceContainer()


def get_storage() -> StorageInterface:
    return container.storage()


def get_email() -> EmailServiceInterface:
    return container.email()


def get_payment_provider() -> PaymentProviderInterface:
    return container.payment()
