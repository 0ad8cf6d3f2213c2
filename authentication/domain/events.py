"""
Domain Events for Authentication.

Published on the infrastructure event bus after the surrounding
transaction commits.
"""

from dataclasses import dataclass

from infrastructure.events import DomainEvent


@dataclass
class UserRegisteredEvent(DomainEvent):
    def __init__(self, user_id: str, email: str):
        super().__init__(event_type="user.registered", payload={"user_id": user_id, "email": email})


@dataclass
class UserBannedEvent(DomainEvent):
    def __init__(self, user_id: str, banned_until: str):
        super().__init__(event_type="user.banned", payload={"user_id": user_id, "banned_until": banned_until})


@dataclass
class SellerApplicationSubmittedEvent(DomainEvent):
    def __init__(self, seller_profile_id: str, user_id: str):
        super().__init__(
            event_type="seller.application_submitted",
            payload={"seller_profile_id": seller_profile_id, "user_id": user_id},
        )


@dataclass
class SellerStatusChangedEvent(DomainEvent):
    def __init__(self, seller_profile_id: str, user_id: str, status: str):
        super().__init__(
            event_type="seller.status_changed",
            payload={"seller_profile_id": seller_profile_id, "user_id": user_id, "status": status},
        )
