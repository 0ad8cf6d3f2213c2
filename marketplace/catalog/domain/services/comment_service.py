"""
CommentService - Review comments, votes and moderation.
"""

import math
from typing import Any, Dict, List

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from infrastructure.events import publish_on_commit
from marketplace.catalog.domain.models import Comment, ContentFlag, Review, Vote
from marketplace.domain.events import ContentFlaggedEvent
from marketplace.infra.observability import metrics
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceError, ServiceResult, service_err, service_ok

from .moderation import check_content


MAX_COMMENT_LENGTH = 1000
MAX_PER_PAGE = 100

_COUNTER_FOR_VOTE = {Vote.UPVOTE: "upvotes", Vote.DOWNVOTE: "downvotes"}


def _validate_content(content: str):
    if not content or not content.strip():
        return service_err(ErrorCodes.INVALID_INPUT, "Comment content is required")
    if len(content) > MAX_COMMENT_LENGTH:
        return service_err(ErrorCodes.INVALID_INPUT, f"Comment must be at most {MAX_COMMENT_LENGTH} characters")
    return None


def _flag_side_effects(comment: Comment):
    if comment.flag != ContentFlag.NONE:
        metrics.content_flagged_total.labels(kind="comment", flag=comment.flag).inc()
        publish_on_commit(
            ContentFlaggedEvent(
                kind="comment", object_id=str(comment.id), user_id=str(comment.user_id), flag=comment.flag
            )
        )


class CommentService(BaseService):
    @BaseService.log_performance
    def create_comment(self, user, review_id, content: str) -> ServiceResult[Comment]:
        invalid = _validate_content(content)
        if invalid:
            return invalid

        review = Review.objects.filter(id=review_id, deleted_at__isnull=True).first()
        if review is None:
            return service_err(ErrorCodes.NOT_FOUND, "Review not found")

        comment = Comment.objects.create(user=user, review=review, content=content, flag=check_content(content))
        _flag_side_effects(comment)
        return service_ok(comment)

    def get_comment(self, comment_id) -> ServiceResult[Comment]:
        comment = Comment.objects.select_related("user").filter(id=comment_id, deleted_at__isnull=True).first()
        if comment is None:
            return service_err(ErrorCodes.NOT_FOUND, "Comment not found")
        return service_ok(comment)

    @BaseService.log_performance
    def update_comment(self, comment_id, user, content: str) -> ServiceResult[Comment]:
        invalid = _validate_content(content)
        if invalid:
            return invalid

        comment = Comment.objects.filter(id=comment_id, deleted_at__isnull=True).first()
        if comment is None:
            return service_err(ErrorCodes.NOT_FOUND, "Comment not found")
        if comment.user_id != user.id:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only edit your own comments")

        if content != comment.content:
            comment.content = content
            comment.flag = check_content(content)
            comment.save(update_fields=["content", "flag", "updated_at"])
            _flag_side_effects(comment)
        return service_ok(comment)

    @BaseService.log_performance
    def revert_flag(self, comment_id) -> ServiceResult[Comment]:
        comment = Comment.objects.filter(id=comment_id, deleted_at__isnull=True).first()
        if comment is None:
            return service_err(ErrorCodes.NOT_FOUND, "Comment not found")
        comment.flag = ContentFlag.NONE
        comment.save(update_fields=["flag", "updated_at"])
        return service_ok(comment)

    @BaseService.log_performance
    def delete_comment(self, comment_id, user) -> ServiceResult[None]:
        comment = Comment.objects.filter(id=comment_id, deleted_at__isnull=True).first()
        if comment is None:
            return service_err(ErrorCodes.NOT_FOUND, "Comment not found")
        if comment.user_id != user.id and not is_admin(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own comments")

        comment.deleted_at = timezone.now()
        comment.save(update_fields=["deleted_at", "updated_at"])
        return service_ok(None)

    def get_flagged_comments(self) -> ServiceResult[List[Comment]]:
        comments = (
            Comment.objects.select_related("user", "review")
            .filter(deleted_at__isnull=True)
            .exclude(flag=ContentFlag.NONE)
            .order_by("created_at")
        )
        return service_ok(list(comments))

    def get_paginated_comments_by_review(self, review_id, page: int = 1, per_page: int = 20) -> ServiceResult[Dict[str, Any]]:
        page = max(int(page or 1), 1)
        per_page = min(max(int(per_page or 20), 1), MAX_PER_PAGE)

        queryset = Comment.objects.select_related("user").filter(review_id=review_id, deleted_at__isnull=True)
        total = queryset.count()
        offset = (page - 1) * per_page
        comments = list(queryset.order_by("created_at")[offset : offset + per_page])

        return service_ok(
            {
                "data": comments,
                "meta": {
                    "total": total,
                    "page": page,
                    "per_page": per_page,
                    "last_page": math.ceil(total / per_page),
                },
            }
        )

    @BaseService.log_performance
    def handle_vote(self, comment_id, user, vote_type: str) -> ServiceResult[Comment]:
        """
        Toggle or switch the user's vote on a comment.

        - no vote yet: create it, +1 on its counter
        - different type: switch it, +1 new counter, -1 old counter
        - same type: remove it, -1 on its counter
        """
        if vote_type not in _COUNTER_FOR_VOTE:
            return service_err(ErrorCodes.INVALID_INPUT, f"Invalid vote type: {vote_type}")

        try:
            with transaction.atomic():
                comment = (
                    Comment.objects.select_for_update().filter(id=comment_id, deleted_at__isnull=True).first()
                )
                if comment is None:
                    raise ServiceError(ErrorCodes.NOT_FOUND, "Comment not found")

                counter = _COUNTER_FOR_VOTE[vote_type]
                existing = Vote.objects.select_for_update().filter(comment=comment, user=user).first()

                if existing is None:
                    Vote.objects.create(comment=comment, user=user, type=vote_type)
                    Comment.objects.filter(id=comment.id).update(**{counter: F(counter) + 1})
                    action = "created"
                elif existing.type != vote_type:
                    old_counter = _COUNTER_FOR_VOTE[existing.type]
                    existing.type = vote_type
                    existing.save(update_fields=["type"])
                    Comment.objects.filter(id=comment.id).update(
                        **{counter: F(counter) + 1, old_counter: F(old_counter) - 1}
                    )
                    action = "switched"
                else:
                    existing.delete()
                    Comment.objects.filter(id=comment.id).update(**{counter: F(counter) - 1})
                    action = "removed"
        except ServiceError as e:
            return e.to_result()

        metrics.votes_total.labels(action=action).inc()
        comment.refresh_from_db()
        return service_ok(comment)
