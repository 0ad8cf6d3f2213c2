"""
SearchService - Code Repository Search & Filtering

A chainable query builder over the public catalog. Every filter is optional;
the base query only ever returns repositories of approved sellers that have
not been deleted.
"""

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from django.core.paginator import Paginator
from django.db import DatabaseError, transaction
from django.db.models import Q

from authentication.models import SellerProfile
from marketplace.catalog.domain.models import CodeRepo, SearchHistory
from marketplace.infra.observability import metrics
from utils.service_base import BaseService, ServiceResult, service_ok


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def unique_tag_names(repo: CodeRepo) -> List[str]:
    """Tag names of a repo, de-duplicated in order, without blanks."""
    names = []
    for tag in repo.tags.all():
        if tag.name and tag.name not in names:
            names.append(tag.name)
    return names


def summarize_repo(repo: CodeRepo) -> Dict[str, Any]:
    """Public listing view of a repository; never includes source."""
    return {
        "id": str(repo.id),
        "user_id": str(repo.user_id),
        "name": repo.name,
        "description": repo.description,
        "language": repo.language,
        "price": repo.price,
        "visibility": repo.visibility,
        "status": repo.status,
        "tags": unique_tag_names(repo),
        "created_at": repo.created_at,
    }


def record_search(user, term: str) -> None:
    """Store a search-history row. Failures are logged, never raised."""
    if user is None or not getattr(user, "is_authenticated", False) or not term:
        return
    try:
        with transaction.atomic():
            SearchHistory.objects.create(user=user, tag=term[:255])
    except DatabaseError as e:
        metrics.search_history_failures.inc()
        logger.warning(f"Could not record search history for user {user.pk}: {e}")


class RepoSearchBuilder:
    """
    Compose a catalog search one filter at a time.

    Example:
        >>> page = (
        ...     RepoSearchBuilder()
        ...     .with_query("react modal")
        ...     .with_tags(["ui"])
        ...     .with_price_range(0, 50)
        ...     .with_language("TSX")
        ...     .with_visibility("public")
        ...     .with_user(request.user, "react modal")
        ...     .paginate(1, 20)
        ... )
    """

    def __init__(self):
        self.queryset = CodeRepo.objects.filter(
            user__seller_profile__verification_status=SellerProfile.STATUS_APPROVED,
            deleted_at__isnull=True,
        )

    def with_query(self, query: Optional[str]) -> "RepoSearchBuilder":
        """Every whitespace-separated term must appear in the name or the description."""
        for term in (query or "").split():
            self.queryset = self.queryset.filter(Q(name__icontains=term) | Q(description__icontains=term))
        return self

    def with_tags(self, tag_names: Optional[Iterable[str]]) -> "RepoSearchBuilder":
        names = [name for name in (tag_names or []) if name]
        if names:
            self.queryset = self.queryset.filter(tags__name__in=names).distinct()
        return self

    def with_price_range(self, min_price=None, max_price=None) -> "RepoSearchBuilder":
        low = _to_decimal(min_price)
        high = _to_decimal(max_price)
        if low is not None:
            self.queryset = self.queryset.filter(price__gte=low)
        if high is not None:
            self.queryset = self.queryset.filter(price__lte=high)
        return self

    def with_language(self, language: Optional[str]) -> "RepoSearchBuilder":
        if language in (CodeRepo.LANGUAGE_JSX, CodeRepo.LANGUAGE_TSX):
            self.queryset = self.queryset.filter(language=language)
        return self

    def with_visibility(self, _visibility: Optional[str] = None) -> "RepoSearchBuilder":
        # Private repositories are never searchable
        self.queryset = self.queryset.filter(visibility=CodeRepo.VISIBILITY_PUBLIC)
        return self

    def with_user(self, user, query: Optional[str]) -> "RepoSearchBuilder":
        record_search(user, (query or "").strip())
        return self

    def paginate(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Dict[str, Any]:
        page = max(int(page or 1), 1)
        page_size = min(max(int(page_size or DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE)

        queryset = self.queryset.prefetch_related("tags").order_by("-created_at")
        paginator = Paginator(queryset, page_size)
        items = paginator.page(page).object_list if page <= paginator.num_pages else []

        return {
            "data": [summarize_repo(repo) for repo in items],
            "meta": {
                "total": paginator.count,
                "page": page,
                "page_size": page_size,
                "last_page": max(math.ceil(paginator.count / page_size), 1),
            },
        }


def _to_decimal(value) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


class SearchService(BaseService):
    """Runs the builder for the search endpoint."""

    @BaseService.log_performance
    def search(self, user, params: Dict[str, Any]) -> ServiceResult[Dict[str, Any]]:
        """
        Args:
            user: Requesting user (anonymous allowed); authenticated users get
                their query recorded in search history
            params: q, tags (list), min_price, max_price, language, page, page_size
        """
        query = (params.get("q") or "").strip()
        with metrics.search_duration.time():
            result = (
                RepoSearchBuilder()
                .with_query(query)
                .with_tags(params.get("tags"))
                .with_price_range(params.get("min_price"), params.get("max_price"))
                .with_language(params.get("language"))
                .with_visibility(params.get("visibility"))
                .with_user(user, query)
                .paginate(params.get("page") or 1, params.get("page_size") or DEFAULT_PAGE_SIZE)
            )

        metrics.searches_total.labels(has_query=str(bool(query)).lower()).inc()
        self.logger.info(f"Search: query='{query}', results={result['meta']['total']}")
        return service_ok(result)
