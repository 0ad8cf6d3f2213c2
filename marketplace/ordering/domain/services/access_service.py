"""
AccessService - Repository Access Grants

A buyer can read a repository's source once an order for it has succeeded.
Grants are upserted on (user, repo) so repeated grants never duplicate rows.
"""

import logging
from datetime import datetime
from typing import List, Optional

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.utils import timezone

from infrastructure.events import publish_on_commit
from marketplace.catalog.domain.models import CodeRepo
from marketplace.domain.events import AccessGrantedEvent
from marketplace.infra.observability import metrics
from marketplace.ordering.domain.models import Order, UserRepoAccess
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


User = get_user_model()
logger = logging.getLogger(__name__)


def _live_grants():
    return UserRepoAccess.objects.filter(Q(expires_at__isnull=True) | Q(expires_at__gt=timezone.now()))


class AccessService(BaseService):
    @BaseService.log_performance
    def grant_access(self, order: Order, expires_at=None) -> ServiceResult[UserRepoAccess]:
        """
        Grant the order's buyer access to the order's repository.

        Args:
            order: A SUCCEEDED order
            expires_at: Optional expiry; None grants permanent access

        Returns:
            ServiceResult with the UserRepoAccess row
        """
        if order.status != Order.STATUS_SUCCEEDED:
            metrics.access_grants_total.labels(result="rejected").inc()
            return service_err(
                ErrorCodes.INVALID_ORDER_STATE, f"Order {order.id} is {order.status}, access requires SUCCEEDED"
            )

        access, created = UserRepoAccess.objects.update_or_create(
            user_id=order.user_id,
            code_repo_id=order.code_repo_id,
            defaults={"order": order, "expires_at": expires_at},
        )
        metrics.access_grants_total.labels(result="created" if created else "updated").inc()
        publish_on_commit(
            AccessGrantedEvent(repo_id=str(order.code_repo_id), user_id=str(order.user_id), order_id=str(order.id))
        )
        self.logger.info(f"Access to repo {order.code_repo_id} granted to user {order.user_id}")
        return service_ok(access)

    def has_access(self, user, repo: CodeRepo) -> bool:
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        return _live_grants().filter(user_id=user.pk, code_repo_id=repo.pk).exists()

    def has_succeeded_order(self, user, repo: CodeRepo) -> bool:
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        return Order.objects.filter(
            user_id=user.pk, code_repo_id=repo.pk, status=Order.STATUS_SUCCEEDED, deleted_at__isnull=True
        ).exists()

    def can_view_source(self, user, repo: CodeRepo) -> bool:
        return self.has_access(user, repo) or self.has_succeeded_order(user, repo)

    def revoke_access(self, user, repo: CodeRepo) -> ServiceResult[None]:
        deleted, _ = UserRepoAccess.objects.filter(user_id=user.pk, code_repo_id=repo.pk).delete()
        if not deleted:
            return service_err(ErrorCodes.NOT_FOUND, "No access grant to revoke")
        self.logger.info(f"Access to repo {repo.pk} revoked for user {user.pk}")
        return service_ok(None)

    def get_user_accessible_repos(self, user) -> ServiceResult[List[CodeRepo]]:
        repo_ids = _live_grants().filter(user_id=user.pk).values_list("code_repo_id", flat=True)
        repos = CodeRepo.objects.filter(id__in=repo_ids, deleted_at__isnull=True).prefetch_related("tags")
        return service_ok(list(repos))

    def get_repo_accessible_users(self, repo: CodeRepo) -> ServiceResult[List[User]]:
        user_ids = _live_grants().filter(code_repo_id=repo.pk).values_list("user_id", flat=True)
        return service_ok(list(User.objects.filter(id__in=user_ids)))

    def expire_access(self, now: Optional[datetime] = None) -> int:
        """Delete grants whose expiry has passed. Returns the number removed."""
        deleted, _ = UserRepoAccess.objects.filter(expires_at__lte=now or timezone.now()).delete()
        if deleted:
            self.logger.info(f"Expired {deleted} repository access grants")
        return deleted
