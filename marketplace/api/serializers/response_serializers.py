"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")
    error = serializers.CharField(help_text="Error code identifier", required=False)


# ===== Catalog Response Serializers =====


class RepoSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    user_id = serializers.UUIDField()
    name = serializers.CharField()
    description = serializers.CharField()
    language = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    visibility = serializers.CharField()
    status = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    created_at = serializers.DateTimeField()


class RepoDetailResponseSerializer(RepoSummarySerializer):
    """Repository detail; source fields only present when can_view_source is true"""

    can_view_source = serializers.BooleanField()
    source_js = serializers.CharField(required=False)
    source_css = serializers.CharField(required=False)


class PageMetaSerializer(serializers.Serializer):
    total = serializers.IntegerField(help_text="Total number of items")
    page = serializers.IntegerField(help_text="Current page number")
    page_size = serializers.IntegerField(help_text="Items per page")
    last_page = serializers.IntegerField(help_text="Last page number")


class PaginatedReposResponseSerializer(serializers.Serializer):
    """Paginated repository list (catalog and search)"""

    data = RepoSummarySerializer(many=True)
    meta = PageMetaSerializer()


# ===== Comment Response Serializers =====


class CommentPageMetaSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    per_page = serializers.IntegerField()
    last_page = serializers.IntegerField()


class PaginatedCommentsResponseSerializer(serializers.Serializer):
    data = serializers.ListField(child=serializers.DictField(), help_text="Comments (see CommentSerializer schema)")
    meta = CommentPageMetaSerializer()
