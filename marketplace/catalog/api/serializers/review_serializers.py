from rest_framework import serializers

from marketplace.catalog.api.serializers.user_serializers import MinimalUserSerializer
from marketplace.catalog.domain.models import Comment, Review, Vote


class ReviewSerializer(serializers.ModelSerializer):
    user = MinimalUserSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "user",
            "code_repo",
            "content",
            "rating",
            "flag",
            "upvotes",
            "downvotes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    repo_id = serializers.UUIDField()
    content = serializers.CharField()
    rating = serializers.IntegerField(min_value=1, max_value=5)


class ReviewUpdateSerializer(serializers.Serializer):
    content = serializers.CharField(required=False)
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)


class CommentSerializer(serializers.ModelSerializer):
    user = MinimalUserSerializer(read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "user", "review", "content", "flag", "upvotes", "downvotes", "created_at", "updated_at"]
        read_only_fields = fields


class CommentCreateSerializer(serializers.Serializer):
    review_id = serializers.UUIDField()
    content = serializers.CharField(max_length=1000)


class CommentUpdateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=1000)


class VoteSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=Vote.TYPE_CHOICES)
