import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class MarketplaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "marketplace"

    def ready(self):
        # Build and wire the service container once per process
        from infrastructure.container import configure_container

        configure_container()
        logger.debug("Marketplace services wired")
