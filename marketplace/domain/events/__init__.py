from .catalog_events import AccessGrantedEvent, ContentFlaggedEvent, RepoCreatedEvent


__all__ = [
    "RepoCreatedEvent",
    "AccessGrantedEvent",
    "ContentFlaggedEvent",
]
