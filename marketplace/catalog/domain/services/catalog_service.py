"""
CatalogService - Code Repository CRUD & Listing

Handles repository creation (registered as a product with the payment
provider), detail views with source gating, updates, soft deletes and the
personalised catalog listing.
"""

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.core.paginator import Paginator
from django.db import transaction
from django.db.models import Exists, OuterRef
from django.utils import timezone

from authentication.infra.observability.tracing import get_tracer
from infrastructure.events import publish_on_commit
from infrastructure.payments.interface import PaymentException
from marketplace.catalog.domain.models import CodeRepo, SearchHistory, Tag
from marketplace.domain.events import RepoCreatedEvent
from marketplace.infra.observability import metrics
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .search_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, record_search, summarize_repo, unique_tag_names


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

RECENT_SEARCH_LIMIT = 10
UPDATABLE_FIELDS = ("name", "description", "language", "price", "source_js", "source_css", "visibility")


def repo_detail(repo: CodeRepo, include_source: bool) -> Dict[str, Any]:
    detail = summarize_repo(repo)
    detail["can_view_source"] = include_source
    if include_source:
        detail["source_js"] = repo.source_js
        detail["source_css"] = repo.source_css
    return detail


def _clean_tag_names(names: Iterable[str]) -> List[str]:
    cleaned = []
    for name in names or []:
        name = (name or "").strip()
        if name and name not in cleaned:
            cleaned.append(name[:50])
    return cleaned


def _validate_repo_data(data: Dict[str, Any], partial: bool = False) -> Optional[ServiceResult]:
    if not partial or "name" in data:
        if not (data.get("name") or "").strip():
            return service_err(ErrorCodes.VALIDATION_ERROR, "Repository name is required")

    if "price" in data or not partial:
        try:
            price = Decimal(str(data.get("price", "0")))
        except InvalidOperation:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Price must be a number")
        if price < 0:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Price cannot be negative")

    if "language" in data and data["language"] not in (CodeRepo.LANGUAGE_JSX, CodeRepo.LANGUAGE_TSX):
        return service_err(ErrorCodes.VALIDATION_ERROR, "Language must be JSX or TSX")

    if "visibility" in data and data["visibility"] not in (CodeRepo.VISIBILITY_PUBLIC, CodeRepo.VISIBILITY_PRIVATE):
        return service_err(ErrorCodes.VALIDATION_ERROR, "Visibility must be public or private")

    return None


class CatalogService(BaseService):
    """
    Service for managing the repository catalog.

    Responsibilities:
    - Create repositories (seller only, enforced by the view)
    - Repository detail with source gated behind purchase
    - Update / soft delete (owner or admin)
    - Catalog listing ordered by the viewer's recent searches
    """

    def __init__(self, payment_provider, access_service):
        """
        Args:
            payment_provider: PaymentProviderInterface (injected via DI container)
            access_service: AccessService used to gate repository source
        """
        super().__init__()
        self.payment_provider = payment_provider
        self.access_service = access_service

    @BaseService.log_performance
    def create_repo(self, user, data: Dict[str, Any]) -> ServiceResult[CodeRepo]:
        """
        Create a repository and register it with the payment provider.

        Args:
            user: Owning seller
            data: name, description, language, price, source_js, source_css,
                visibility, tags (list of names)

        Returns:
            ServiceResult with the created CodeRepo (status pending)
        """
        with tracer.start_as_current_span("catalog_create_repo") as span:
            span.set_attribute("user.id", str(user.pk))

            invalid = _validate_repo_data(data)
            if invalid:
                return invalid

            price = Decimal(str(data.get("price", "0")))
            try:
                product = self.payment_provider.create_product(
                    name=data["name"],
                    description=data.get("description", ""),
                    price=price,
                    currency=settings.PRODUCT_CURRENCY,
                    metadata={"user_id": str(user.pk)},
                )
            except PaymentException as e:
                self.logger.error(f"Provider product creation failed for user {user.pk}: {e}")
                return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, str(e))

            with transaction.atomic():
                repo = CodeRepo.objects.create(
                    user=user,
                    name=data["name"].strip(),
                    description=data.get("description", ""),
                    language=data.get("language", CodeRepo.LANGUAGE_JSX),
                    price=price,
                    source_js=data.get("source_js", ""),
                    source_css=data.get("source_css", ""),
                    visibility=data.get("visibility") or CodeRepo.VISIBILITY_PUBLIC,
                    status=CodeRepo.STATUS_PENDING,
                    stripe_product_id=product.product_id,
                    stripe_price_id=product.price_id,
                )
                self._set_tags(repo, data.get("tags") or [])
                publish_on_commit(RepoCreatedEvent(repo_id=str(repo.id), user_id=str(user.pk), language=repo.language))

            metrics.repos_created_total.labels(language=repo.language).inc()
            span.set_attribute("repo.id", str(repo.id))
            self.logger.info(f"Created repo {repo.id} for seller {user.pk}")
            return service_ok(repo)

    def _set_tags(self, repo: CodeRepo, names: Iterable[str]):
        tags = []
        for name in _clean_tag_names(names):
            tag, _ = Tag.objects.get_or_create(name=name)
            tags.append(tag)
        repo.tags.set(tags)

    def _get_live_repo(self, repo_id) -> Optional[CodeRepo]:
        return CodeRepo.objects.prefetch_related("tags").filter(id=repo_id, deleted_at__isnull=True).first()

    def can_view_source(self, viewer, repo: CodeRepo) -> bool:
        if viewer is None or not getattr(viewer, "is_authenticated", False):
            return False
        if repo.user_id == viewer.pk or is_admin(viewer):
            return True
        return self.access_service.can_view_source(viewer, repo)

    @BaseService.log_performance
    def get_repo(self, repo_id, viewer=None) -> ServiceResult[Dict[str, Any]]:
        """
        Repository detail.

        Authenticated viewers get one search-history entry per repo tag.
        Source is only included for the owner, admins and buyers.
        """
        repo = self._get_live_repo(repo_id)
        if repo is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Repository not found")

        if viewer is not None and getattr(viewer, "is_authenticated", False):
            for tag_name in unique_tag_names(repo):
                record_search(viewer, tag_name)

        include_source = self.can_view_source(viewer, repo)
        metrics.repo_views_total.labels(gated=str(not include_source).lower()).inc()
        return service_ok(repo_detail(repo, include_source))

    @BaseService.log_performance
    def update_repo(self, repo_id, user, data: Dict[str, Any]) -> ServiceResult[CodeRepo]:
        repo = self._get_live_repo(repo_id)
        if repo is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Repository not found")
        if repo.user_id != user.pk and not is_admin(user):
            return service_err(ErrorCodes.NOT_PRODUCT_OWNER, "You can only update your own repositories")

        invalid = _validate_repo_data(data, partial=True)
        if invalid:
            return invalid

        with transaction.atomic():
            for field in UPDATABLE_FIELDS:
                if field in data:
                    value = Decimal(str(data[field])) if field == "price" else data[field]
                    setattr(repo, field, value)
            repo.save()

            if "tags" in data and data["tags"] is not None:
                self._set_tags(repo, data["tags"])

        self.logger.info(f"Updated repo {repo.id} by {user.pk}")
        return service_ok(repo)

    @BaseService.log_performance
    def update_repo_status(self, repo_id, status: str) -> ServiceResult[CodeRepo]:
        """Admin review of a listing (pending -> active / rejected)."""
        valid = {choice for choice, _ in CodeRepo.STATUS_CHOICES}
        if status not in valid:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid status. Must be one of: {', '.join(sorted(valid))}")

        repo = self._get_live_repo(repo_id)
        if repo is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Repository not found")

        repo.status = status
        repo.save(update_fields=["status", "updated_at"])
        return service_ok(repo)

    @BaseService.log_performance
    def delete_repo(self, repo_id, user) -> ServiceResult[None]:
        repo = self._get_live_repo(repo_id)
        if repo is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Repository not found")
        if repo.user_id != user.pk and not is_admin(user):
            return service_err(ErrorCodes.NOT_PRODUCT_OWNER, "You can only delete your own repositories")

        repo.deleted_at = timezone.now()
        repo.save(update_fields=["deleted_at", "updated_at"])
        self.logger.info(f"Soft-deleted repo {repo.id} by {user.pk}")
        return service_ok(None)

    def ban_user_repos(self, user_id) -> int:
        """Hide every live repository of a banned seller."""
        return CodeRepo.objects.filter(user_id=user_id, deleted_at__isnull=True).update(
            status=CodeRepo.STATUS_BANNED_USER
        )

    def _recent_search_tags(self, viewer) -> List[str]:
        if viewer is None or not getattr(viewer, "is_authenticated", False):
            return []
        return list(
            SearchHistory.objects.filter(user_id=viewer.pk)
            .order_by("-created_at")
            .values_list("tag", flat=True)[:RECENT_SEARCH_LIMIT]
        )

    @BaseService.log_performance
    def get_paginated_repos(self, viewer=None, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> ServiceResult[Dict[str, Any]]:
        """
        Public catalog listing.

        Repos tagged with any of the viewer's recent searches come first,
        newest first within each group.
        """
        page = max(int(page or 1), 1)
        page_size = min(max(int(page_size or DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE)

        recent_tags = self._recent_search_tags(viewer)
        queryset = CodeRepo.objects.filter(
            visibility=CodeRepo.VISIBILITY_PUBLIC,
            status=CodeRepo.STATUS_ACTIVE,
            deleted_at__isnull=True,
        ).annotate(
            matches_recent=Exists(Tag.objects.filter(code_repos=OuterRef("pk"), name__in=recent_tags))
        )
        queryset = queryset.prefetch_related("tags").order_by("-matches_recent", "-created_at")

        paginator = Paginator(queryset, page_size)
        items = paginator.page(page).object_list if page <= paginator.num_pages else []

        return service_ok(
            {
                "data": [summarize_repo(repo) for repo in items],
                "meta": {
                    "total": paginator.count,
                    "page": page,
                    "page_size": page_size,
                    "last_page": max(math.ceil(paginator.count / page_size), 1),
                },
            }
        )

    def get_repos_by_user(self, user_id) -> ServiceResult[List[CodeRepo]]:
        repos = CodeRepo.objects.prefetch_related("tags").filter(user_id=user_id, deleted_at__isnull=True)
        return service_ok(list(repos.order_by("-created_at")))

    def get_all_repos(self) -> ServiceResult[List[CodeRepo]]:
        repos = CodeRepo.objects.prefetch_related("tags").filter(deleted_at__isnull=True)
        return service_ok(list(repos.order_by("-created_at")))
