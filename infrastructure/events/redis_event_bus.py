import json
import logging
import threading
from typing import Callable, Dict, List

import redis
from django.conf import settings
from django.utils import timezone

from .event_bus_interface import EventBus


logger = logging.getLogger(__name__)


def build_envelope(event_type: str, payload: dict) -> dict:
    return {"event_type": event_type, "occurred_at": timezone.now().isoformat(), "payload": payload}


class RedisEventBus(EventBus):
    """Redis pub/sub implementation of event bus.

    Publishing never raises: a lost event is logged, business logic goes on.
    """

    def __init__(self, redis_url: str = None):
        self.redis_url = redis_url or getattr(settings, "REDIS_URL", "redis://localhost:6379/0")
        self.redis_client = redis.from_url(self.redis_url)
        self._subscribers: Dict[str, List[Callable]] = {}
        self._listening = False

    def publish(self, event_type: str, payload: dict):
        try:
            channel = f"events.{event_type}"
            self.redis_client.publish(channel, json.dumps(build_envelope(event_type, payload), default=str))
            logger.info(f"Published event: {event_type}")
        except redis.RedisError as e:
            logger.error(f"Failed to publish event {event_type}: {str(e)}")

    def subscribe(self, event_type: str, handler: Callable):
        self._subscribers.setdefault(event_type, []).append(handler)
        logger.info(f"Registered handler for event: {event_type}")

    def start_listening(self):
        """Start listening to subscribed channels in a background thread."""
        if self._listening or not self._subscribers:
            return

        def listen():
            try:
                pubsub = self.redis_client.pubsub()
                channels = [f"events.{et}" for et in self._subscribers]
                pubsub.subscribe(*channels)
                self._listening = True
                logger.info(f"EventBus listening on: {channels}")

                for message in pubsub.listen():
                    if message["type"] == "message":
                        self._handle_message(message)
            except redis.RedisError as e:
                logger.error(f"EventBus listener crashed: {e}")
                self._listening = False

        threading.Thread(target=listen, daemon=True).start()

    def _handle_message(self, message):
        try:
            data = json.loads(message["data"])
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to decode event message: {str(e)}")
            return
        dispatch(self._subscribers.get(data.get("event_type"), []), data)


class InMemoryEventBus(EventBus):
    """Synchronous in-process bus used by tests and single-process runs."""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}
        self.published: List[dict] = []

    def publish(self, event_type: str, payload: dict):
        envelope = build_envelope(event_type, payload)
        self.published.append(envelope)
        dispatch(self._subscribers.get(event_type, []), envelope)

    def subscribe(self, event_type: str, handler: Callable):
        handlers = self._subscribers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)


def dispatch(handlers: List[Callable], envelope: dict):
    for handler in handlers:
        try:
            handler(envelope)
        except Exception as e:
            logger.error(f"Handler error for {envelope.get('event_type')}: {str(e)}", exc_info=True)


_event_bus_instance = None


def get_event_bus() -> EventBus:
    """Get singleton event bus instance."""
    global _event_bus_instance
    if _event_bus_instance is None:
        backend = getattr(settings, "INFRASTRUCTURE", {}).get("EVENT_BUS", "redis")
        _event_bus_instance = InMemoryEventBus() if backend == "memory" else RedisEventBus()
    return _event_bus_instance
