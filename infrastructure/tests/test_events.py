"""
Event Bus Tests
================
"""

from unittest.mock import MagicMock, patch

import redis
from django.test import SimpleTestCase, TestCase

from infrastructure.events import InMemoryEventBus, RedisEventBus, get_event_bus, publish_on_commit
from payment_system.domain.events import PayoutRequestedEvent


class InMemoryEventBusTest(SimpleTestCase):
    def test_publish_dispatches_envelope(self):
        bus = InMemoryEventBus()
        handler = MagicMock()
        bus.subscribe("order.paid", handler)

        bus.publish("order.paid", {"order_id": "o1"})

        envelope = handler.call_args.args[0]
        self.assertEqual(envelope["event_type"], "order.paid")
        self.assertEqual(envelope["payload"], {"order_id": "o1"})
        self.assertEqual(len(bus.published), 1)

    def test_duplicate_subscription_ignored(self):
        bus = InMemoryEventBus()
        handler = MagicMock()
        bus.subscribe("x", handler)
        bus.subscribe("x", handler)

        bus.publish("x", {})

        handler.assert_called_once()

    def test_failing_handler_does_not_stop_others(self):
        bus = InMemoryEventBus()
        second = MagicMock()
        bus.subscribe("x", MagicMock(side_effect=RuntimeError("boom")))
        bus.subscribe("x", second)

        bus.publish("x", {})

        second.assert_called_once()


class RedisEventBusTest(SimpleTestCase):
    @patch("infrastructure.events.redis_event_bus.redis.from_url")
    def test_publish_swallows_redis_errors(self, mock_from_url):
        client = MagicMock()
        client.publish.side_effect = redis.ConnectionError("down")
        mock_from_url.return_value = client

        RedisEventBus("redis://nowhere:6379/0").publish("order.paid", {"order_id": "o1"})

        client.publish.assert_called_once()
        self.assertEqual(client.publish.call_args.args[0], "events.order.paid")

    @patch("infrastructure.events.redis_event_bus.redis.from_url")
    def test_handle_message_dispatches(self, mock_from_url):
        bus = RedisEventBus("redis://nowhere:6379/0")
        handler = MagicMock()
        bus.subscribe("payout.requested", handler)

        bus._handle_message({"data": '{"event_type": "payout.requested", "payload": {"amount": "60"}}'})

        self.assertEqual(handler.call_args.args[0]["payload"], {"amount": "60"})


class PublishOnCommitTest(TestCase):
    def test_published_after_commit(self):
        bus = get_event_bus()
        before = len(bus.published)

        with self.captureOnCommitCallbacks(execute=True):
            publish_on_commit(PayoutRequestedEvent(payout_request_id="r1", seller_id="s1", amount="60.00"))
            self.assertEqual(len(bus.published), before)

        self.assertEqual(bus.published[-1]["event_type"], "payout.requested")
