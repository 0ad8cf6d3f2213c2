"""
OrderService - Order queries

Orders are created by the checkout pipeline (payment_system); this service
only reads them back for buyers and admins.
"""

import logging
from typing import List

from marketplace.ordering.domain.models import Order
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


logger = logging.getLogger(__name__)


class OrderService(BaseService):
    """
    Service for reading orders.
    """

    def _base_queryset(self):
        return Order.objects.select_related("code_repo", "user").filter(deleted_at__isnull=True)

    def get_user_orders(self, user) -> ServiceResult[List[Order]]:
        return service_ok(list(self._base_queryset().filter(user=user).order_by("-created_at")))

    @BaseService.log_performance
    def get_order(self, order_id, user) -> ServiceResult[Order]:
        """
        Get a single order.

        Args:
            order_id: Order UUID
            user: Requesting user; must be the buyer or an admin

        Returns:
            ServiceResult with Order
        """
        order = self._base_queryset().filter(id=order_id).first()
        if order is None:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

        if order.user_id != user.pk and not is_admin(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You don't have permission to view this order")

        return service_ok(order)

    def get_orders_by_status(self, status: str) -> ServiceResult[List[Order]]:
        valid = {choice for choice, _ in Order.STATUS_CHOICES}
        if status not in valid:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid status. Must be one of: {', '.join(sorted(valid))}")
        return service_ok(list(self._base_queryset().filter(status=status).order_by("-created_at")))
