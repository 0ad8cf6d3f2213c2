import logging

from django.apps import AppConfig


logger = logging.getLogger(__name__)


class MarketplaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "marketplace"

    def ready(self):
        from marketplace.infra.events.listeners import register_marketplace_listeners

        register_marketplace_listeners()
