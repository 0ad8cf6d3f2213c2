import logging

from django.db import transaction


logger = logging.getLogger(__name__)


def publish_on_commit(event):
    """Publish a domain event once the surrounding transaction commits.

    ``event`` is any object exposing ``event_type`` and ``payload``. Outside a
    transaction the event is published immediately.
    """
    from .redis_event_bus import get_event_bus

    def _publish():
        get_event_bus().publish(event.event_type, event.payload)

    transaction.on_commit(_publish)
