from .catalog_service import CatalogService
from .code_check_service import CodeCheckService
from .comment_service import CommentService
from .moderation import check_content
from .review_service import ReviewService
from .search_service import RepoSearchBuilder, SearchService


__all__ = [
    "CatalogService",
    "CodeCheckService",
    "CommentService",
    "ReviewService",
    "RepoSearchBuilder",
    "SearchService",
    "check_content",
]
