"""
ModeratorDashboardService - Flagged content, bans and review activity.
"""

import logging
import re
from collections import Counter
from datetime import timedelta
from typing import Any, Dict, List

from django.contrib.auth import get_user_model
from django.db.models import Avg, Count, Q
from django.utils import timezone

from marketplace.catalog.domain.models import CodeRepo, Comment, ContentFlag, Review
from utils.service_base import BaseService, ServiceResult, service_ok


logger = logging.getLogger(__name__)

User = get_user_model()

WORD_RE = re.compile(r"[a-zA-Z0-9']+")
TRENDING_SAMPLE = 100
TRENDING_LIMIT = 10
QUEUE_SIZE = 10


def _live(model):
    return model.objects.filter(deleted_at__isnull=True)


def _flagged(model):
    return _live(model).exclude(flag=ContentFlag.NONE)


def trending_topics(texts, limit: int = TRENDING_LIMIT) -> List[Dict[str, Any]]:
    """Most frequent words longer than three characters."""
    counter = Counter()
    for text in texts:
        counter.update(word for word in WORD_RE.findall(text.lower()) if len(word) > 3)
    return [{"word": word, "count": count} for word, count in counter.most_common(limit)]


class ModeratorDashboardService(BaseService):
    @BaseService.log_performance
    def get_moderator_dashboard(self) -> ServiceResult[Dict[str, Any]]:
        return service_ok(
            {
                "content_moderation_overview": self._overview(),
                "moderation_activity": self._activity(),
                "user_report_management": self._user_reports(),
                "content_analytics": self._content_analytics(),
                "user_management": self._user_management(),
                "review_and_comment_metrics": self._review_and_comment_metrics(),
                "moderation_queue": self._queue(),
            }
        )

    def _overview(self) -> Dict[str, Any]:
        by_flag = Counter()
        for model in (Review, Comment):
            for row in _flagged(model).values("flag").annotate(count=Count("pk")):
                by_flag[row["flag"]] += row["count"]

        flagged_reviews = _flagged(Review).count()
        flagged_comments = _flagged(Comment).count()
        return {
            "flagged_reviews": flagged_reviews,
            "flagged_comments": flagged_comments,
            "total_flagged": flagged_reviews + flagged_comments,
            "by_flag": dict(by_flag),
        }

    def _activity(self) -> Dict[str, int]:
        now = timezone.now()
        windows = {"last_day": timedelta(days=1), "last_week": timedelta(weeks=1), "last_month": timedelta(days=30)}
        return {
            name: _flagged(Review).filter(created_at__gte=now - window).count()
            + _flagged(Comment).filter(created_at__gte=now - window).count()
            for name, window in windows.items()
        }

    def _user_reports(self) -> Dict[str, Any]:
        flagged_reviews = Q(reviews__deleted_at__isnull=True) & ~Q(reviews__flag=ContentFlag.NONE)
        flagged_comments = Q(comments__deleted_at__isnull=True) & ~Q(comments__flag=ContentFlag.NONE)
        offenders = (
            User.objects.annotate(
                flagged_reviews=Count("reviews", filter=flagged_reviews, distinct=True),
                flagged_comments=Count("comments", filter=flagged_comments, distinct=True),
            )
            .filter(Q(flagged_reviews__gt=0) | Q(flagged_comments__gt=0))
            .order_by("-flagged_reviews", "-flagged_comments")
            .values("id", "email", "username", "flagged_reviews", "flagged_comments")[:10]
        )
        return {
            "banned_users": User.objects.filter(banned_until__gt=timezone.now()).count(),
            "users_with_flagged_content": list(offenders),
        }

    def _content_analytics(self) -> Dict[str, Any]:
        most_reviewed = (
            CodeRepo.objects.filter(deleted_at__isnull=True)
            .annotate(review_count=Count("reviews", filter=Q(reviews__deleted_at__isnull=True)))
            .filter(review_count__gt=0)
            .order_by("-review_count")
            .values("id", "name", "review_count")[:5]
        )
        latest = _live(Review).order_by("-created_at").values_list("content", flat=True)[:TRENDING_SAMPLE]
        return {"most_reviewed_repos": list(most_reviewed), "trending_topics": trending_topics(latest)}

    def _user_management(self) -> Dict[str, Any]:
        bans = (
            User.objects.filter(banned_until__isnull=False)
            .order_by("-banned_until")
            .values("id", "email", "username", "banned_until")[:10]
        )
        return {"recent_bans": list(bans)}

    def _review_and_comment_metrics(self) -> Dict[str, Any]:
        reviews = _live(Review)
        distribution = {rating: 0 for rating in range(1, 6)}
        for row in reviews.values("rating").annotate(count=Count("pk")):
            distribution[row["rating"]] = row["count"]

        average = reviews.aggregate(avg=Avg("rating"))["avg"]
        return {
            "total_reviews": reviews.count(),
            "total_comments": _live(Comment).count(),
            "average_rating": round(average, 2) if average is not None else None,
            "rating_distribution": distribution,
        }

    def _queue(self) -> Dict[str, Any]:
        reviews = _flagged(Review).order_by("created_at").values(
            "id", "content", "flag", "created_at", "user_id", "code_repo_id"
        )[:QUEUE_SIZE]
        comments = _flagged(Comment).order_by("created_at").values(
            "id", "content", "flag", "created_at", "user_id", "review_id"
        )[:QUEUE_SIZE]
        return {"reviews": list(reviews), "comments": list(comments)}
