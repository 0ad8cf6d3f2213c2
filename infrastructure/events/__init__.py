from .domain_event import DomainEvent
from .event_bus_interface import EventBus
from .publisher import publish_on_commit
from .redis_event_bus import InMemoryEventBus, RedisEventBus, get_event_bus


__all__ = ["DomainEvent", "EventBus", "RedisEventBus", "InMemoryEventBus", "get_event_bus", "publish_on_commit"]
