from .response_serializers import (
    ErrorResponseSerializer,
    PaginatedCommentsResponseSerializer,
    PaginatedReposResponseSerializer,
    RepoDetailResponseSerializer,
)


__all__ = [
    "ErrorResponseSerializer",
    "PaginatedCommentsResponseSerializer",
    "PaginatedReposResponseSerializer",
    "RepoDetailResponseSerializer",
]
