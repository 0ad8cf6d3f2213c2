from django.urls import path

from payment_system.api.views import admin_views, checkout_views, payout_views
from payment_system.api.views.webhook_views import ConnectWebhookView, PaymentWebhookView


app_name = "payment_system"

urlpatterns = [
    # Checkout
    path("checkout/", checkout_views.create_checkout, name="create_checkout"),
    path("checkout/<str:intent_id>/", checkout_views.get_payment_intent, name="payment_intent"),
    # Webhook endpoints
    path("webhooks/stripe/", PaymentWebhookView.as_view(), name="stripe_webhook"),
    path("webhooks/stripe/connect/", ConnectWebhookView.as_view(), name="stripe_webhook_connect"),
    # Seller payouts
    path("payouts/balance/", payout_views.seller_balance, name="seller_balance"),
    path("payouts/requests/", payout_views.payout_requests, name="payout_requests"),
    path("payouts/history/", payout_views.payout_history, name="payout_history"),
    # Admin payout review
    path("admin/payout-requests/", admin_views.admin_payout_requests, name="admin_payout_requests"),
    path(
        "admin/payout-requests/<uuid:payout_request_id>/",
        admin_views.admin_payout_request_detail,
        name="admin_payout_request_detail",
    ),
    path(
        "admin/payout-requests/<uuid:payout_request_id>/process/",
        admin_views.admin_process_payout_request,
        name="admin_process_payout_request",
    ),
    path("admin/seller-earnings/", admin_views.admin_seller_earnings, name="admin_seller_earnings"),
]
