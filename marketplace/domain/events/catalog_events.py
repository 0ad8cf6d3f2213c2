from dataclasses import dataclass

from infrastructure.events import DomainEvent


@dataclass
class RepoCreatedEvent(DomainEvent):
    """Event: Code repository listed (pending review)."""

    def __init__(self, repo_id: str, user_id: str, language: str):
        super().__init__(
            event_type="repo.created",
            payload={"repo_id": repo_id, "user_id": user_id, "language": language},
        )


@dataclass
class AccessGrantedEvent(DomainEvent):
    """Event: Buyer received access to a repository."""

    def __init__(self, repo_id: str, user_id: str, order_id: str):
        super().__init__(
            event_type="repo.access_granted",
            payload={"repo_id": repo_id, "user_id": user_id, "order_id": order_id},
        )


@dataclass
class ContentFlaggedEvent(DomainEvent):
    """Event: Review or comment flagged for moderation."""

    def __init__(self, kind: str, object_id: str, user_id: str, flag: str):
        super().__init__(
            event_type="content.flagged",
            payload={"kind": kind, "object_id": object_id, "user_id": user_id, "flag": flag},
        )
