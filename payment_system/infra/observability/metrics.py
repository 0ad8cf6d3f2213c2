from prometheus_client import Counter, Gauge, Histogram


# Checkout Metrics
checkouts_initiated_total = Counter("payment_checkouts_initiated_total", "Payment intents created", ["currency"])
payment_volume_total = Counter("payment_volume_total", "Total payment volume processed", ["currency", "status"])
payment_processing_seconds = Histogram("payment_processing_seconds", "Time spent confirming a payment")

# Payout Metrics
payout_requests_total = Counter("payout_requests_total", "Payout requests by outcome", ["result"])
payout_volume_total = Counter("payout_volume_total", "Total payout volume processed", ["currency", "status"])
pending_payout_requests = Gauge("pending_payout_requests", "Payout requests waiting for review")

# Webhook Metrics
webhook_events_total = Counter("payment_webhook_events_total", "Provider webhook events received", ["event_type", "handled"])
