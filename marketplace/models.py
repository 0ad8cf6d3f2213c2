from marketplace.catalog.domain.models import CodeRepo, Comment, ContentFlag, Review, SearchHistory, Tag, Vote
from marketplace.ordering.domain.models import Order, UserRepoAccess


__all__ = [
    "CodeRepo",
    "Tag",
    "SearchHistory",
    "Review",
    "Comment",
    "Vote",
    "ContentFlag",
    "Order",
    "UserRepoAccess",
]
