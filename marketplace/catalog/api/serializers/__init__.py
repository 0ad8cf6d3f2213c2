from .code_check_serializers import CodeCheckRequestSerializer, CodeCheckResponseSerializer
from .repo_serializers import (
    CodeRepoOwnerSerializer,
    CodeRepoSerializer,
    CodeRepoWriteSerializer,
    RepoStatusSerializer,
    SearchParamsSerializer,
)
from .review_serializers import (
    CommentCreateSerializer,
    CommentSerializer,
    CommentUpdateSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewUpdateSerializer,
    VoteSerializer,
)
from .user_serializers import MinimalUserSerializer


__all__ = [
    "CodeRepoSerializer",
    "CodeRepoOwnerSerializer",
    "CodeRepoWriteSerializer",
    "RepoStatusSerializer",
    "SearchParamsSerializer",
    "ReviewSerializer",
    "ReviewCreateSerializer",
    "ReviewUpdateSerializer",
    "CommentSerializer",
    "CommentCreateSerializer",
    "CommentUpdateSerializer",
    "VoteSerializer",
    "MinimalUserSerializer",
    "CodeCheckRequestSerializer",
    "CodeCheckResponseSerializer",
]
