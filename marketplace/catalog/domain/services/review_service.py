"""
ReviewService - Code Repository Review Management

Handles create, update, soft delete, voting and moderation of reviews.
Content is run through the profanity check on every write.
"""

import logging
from typing import List, Optional

from django.db.models import F
from django.utils import timezone

from infrastructure.events import publish_on_commit
from marketplace.catalog.domain.models import CodeRepo, ContentFlag, Review
from marketplace.domain.events import ContentFlaggedEvent
from marketplace.infra.observability import metrics
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .moderation import check_content


logger = logging.getLogger(__name__)


def _flag_side_effects(review: Review):
    if review.flag != ContentFlag.NONE:
        metrics.content_flagged_total.labels(kind="review", flag=review.flag).inc()
        publish_on_commit(
            ContentFlaggedEvent(kind="review", object_id=str(review.id), user_id=str(review.user_id), flag=review.flag)
        )


class ReviewService(BaseService):
    """
    Service for managing repository reviews.

    Responsibilities:
    - Create / update / soft delete reviews
    - Flag inappropriate language on write
    - Up/down vote counters
    - Moderator flag revert and flagged queue
    """

    @BaseService.log_performance
    def create_review(self, user, repo_id, content: str, rating: int) -> ServiceResult[Review]:
        """
        Create a new review for a repository.

        Args:
            user: Review author
            repo_id: CodeRepo UUID
            content: Review text
            rating: Rating (1-5)

        Returns:
            ServiceResult with the created Review
        """
        try:
            if not content or not content.strip():
                return service_err(ErrorCodes.INVALID_INPUT, "Review content is required")
            if not isinstance(rating, int) or not 1 <= rating <= 5:
                return service_err(ErrorCodes.INVALID_INPUT, "Rating must be between 1 and 5")

            repo = CodeRepo.objects.filter(id=repo_id, deleted_at__isnull=True).first()
            if repo is None:
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Repository not found")

            review = Review.objects.create(
                user=user, code_repo=repo, content=content, rating=rating, flag=check_content(content)
            )
            _flag_side_effects(review)

            self.logger.info(f"Created review {review.id} for repo {repo.id} by user {user.id}")
            return service_ok(review)

        except Exception as e:
            self.logger.error(f"Error creating review: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    def get_review(self, review_id) -> ServiceResult[Review]:
        review = Review.objects.select_related("user").filter(id=review_id, deleted_at__isnull=True).first()
        if review is None:
            return service_err(ErrorCodes.NOT_FOUND, "Review not found")
        return service_ok(review)

    def get_reviews_by_repo(self, repo_id) -> ServiceResult[List[Review]]:
        reviews = Review.objects.select_related("user").filter(code_repo_id=repo_id, deleted_at__isnull=True)
        return service_ok(list(reviews.order_by("-created_at")))

    @BaseService.log_performance
    def update_review(
        self, user, review_id, content: Optional[str] = None, rating: Optional[int] = None
    ) -> ServiceResult[Review]:
        """Owner-only update; changed content is re-checked for profanity."""
        review = Review.objects.filter(id=review_id, deleted_at__isnull=True).first()
        if review is None:
            return service_err(ErrorCodes.NOT_FOUND, "Review not found")
        if review.user_id != user.id:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only edit your own reviews")

        update_fields = ["updated_at"]
        if rating is not None:
            if not isinstance(rating, int) or not 1 <= rating <= 5:
                return service_err(ErrorCodes.INVALID_INPUT, "Rating must be between 1 and 5")
            review.rating = rating
            update_fields.append("rating")

        if content is not None and content != review.content:
            if not content.strip():
                return service_err(ErrorCodes.INVALID_INPUT, "Review content is required")
            review.content = content
            review.flag = check_content(content)
            update_fields += ["content", "flag"]

        review.save(update_fields=update_fields)
        if "flag" in update_fields:
            _flag_side_effects(review)
        return service_ok(review)

    @BaseService.log_performance
    def delete_review(self, user, review_id) -> ServiceResult[None]:
        review = Review.objects.filter(id=review_id, deleted_at__isnull=True).first()
        if review is None:
            return service_err(ErrorCodes.NOT_FOUND, "Review not found")
        if review.user_id != user.id and not is_admin(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own reviews")

        review.deleted_at = timezone.now()
        review.save(update_fields=["deleted_at", "updated_at"])
        self.logger.info(f"Review {review.id} soft-deleted by {user.id}")
        return service_ok(None)

    def upvote_review(self, review_id) -> ServiceResult[Review]:
        return self._bump(review_id, "upvotes")

    def downvote_review(self, review_id) -> ServiceResult[Review]:
        return self._bump(review_id, "downvotes")

    def _bump(self, review_id, counter: str) -> ServiceResult[Review]:
        updated = Review.objects.filter(id=review_id, deleted_at__isnull=True).update(**{counter: F(counter) + 1})
        if not updated:
            return service_err(ErrorCodes.NOT_FOUND, "Review not found")
        return service_ok(Review.objects.get(id=review_id))

    @BaseService.log_performance
    def revert_review_flag(self, review_id) -> ServiceResult[Review]:
        review = Review.objects.filter(id=review_id, deleted_at__isnull=True).first()
        if review is None:
            return service_err(ErrorCodes.NOT_FOUND, "Review not found")
        review.flag = ContentFlag.NONE
        review.save(update_fields=["flag", "updated_at"])
        return service_ok(review)

    def get_flagged_reviews(self) -> ServiceResult[List[Review]]:
        reviews = (
            Review.objects.select_related("user", "code_repo")
            .filter(deleted_at__isnull=True)
            .exclude(flag=ContentFlag.NONE)
            .order_by("created_at")
        )
        return service_ok(list(reviews))
