import uuid

from django.conf import settings
from django.core.validators import MaxLengthValidator, MaxValueValidator, MinLengthValidator, MinValueValidator
from django.db import models

from .catalog import CodeRepo


class ContentFlag(models.TextChoices):
    NONE = "NONE", "None"
    SPAM = "SPAM", "Spam"
    INAPPROPRIATE_LANGUAGE = "INAPPROPRIATE_LANGUAGE", "Inappropriate language"
    HARASSMENT = "HARASSMENT", "Harassment"
    OFF_TOPIC = "OFF_TOPIC", "Off topic"
    FALSE_INFORMATION = "FALSE_INFORMATION", "False information"
    OTHER = "OTHER", "Other"


class Review(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews")
    code_repo = models.ForeignKey(CodeRepo, on_delete=models.CASCADE, related_name="reviews")
    content = models.TextField()
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    flag = models.CharField(max_length=32, choices=ContentFlag.choices, default=ContentFlag.NONE, db_index=True)
    upvotes = models.PositiveIntegerField(default=0)
    downvotes = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        db_table = "reviews"
        constraints = [
            models.CheckConstraint(condition=models.Q(rating__gte=1, rating__lte=5), name="review_rating_range"),
        ]

    def __str__(self):
        return f"Review {self.rating}/5 on {self.code_repo_id}"


class Comment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="comments")
    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name="comments")
    content = models.TextField(validators=[MinLengthValidator(1), MaxLengthValidator(1000)])
    flag = models.CharField(max_length=32, choices=ContentFlag.choices, default=ContentFlag.NONE, db_index=True)
    upvotes = models.PositiveIntegerField(default=0)
    downvotes = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["created_at"]
        app_label = "marketplace"
        db_table = "comments"
        indexes = [models.Index(fields=["review", "deleted_at", "created_at"])]

    def __str__(self):
        return f"Comment {self.id} on review {self.review_id}"


class Vote(models.Model):
    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"
    TYPE_CHOICES = [(UPVOTE, "Upvote"), (DOWNVOTE, "Downvote")]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="votes")
    comment = models.ForeignKey(Comment, on_delete=models.CASCADE, related_name="votes")
    type = models.CharField(max_length=8, choices=TYPE_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "marketplace"
        db_table = "votes"
        constraints = [models.UniqueConstraint(fields=["user", "comment"], name="unique_vote_per_user_comment")]

    def __str__(self):
        return f"{self.type} by {self.user_id} on {self.comment_id}"
