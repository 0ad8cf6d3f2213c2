from .catalog import CodeRepo, SearchHistory, Tag
from .interaction import Comment, ContentFlag, Review, Vote


__all__ = [
    "CodeRepo",
    "Tag",
    "SearchHistory",
    "Review",
    "Comment",
    "Vote",
    "ContentFlag",
]
