"""
Dependency Injection Container
================================

Builds the service graph explicitly at startup. Services receive their
collaborators through their constructors; nothing is looked up from a
global registry inside a service.

Usage:
    from infrastructure.container import get_container

    # In a view
    orders = get_container().order_service()
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Holds one instance of every domain service.

    The catalog service is shared: the order and seller services both read
    products through it.
    """

    def __init__(self, catalog_service=None, auth_service=None, user_service=None):
        from authentication.domain.services import AuthService, UserService
        from marketplace.catalog.domain.services.catalog_service import CatalogService
        from marketplace.ordering.domain.services.order_service import OrderService
        from marketplace.sellers.domain.services.seller_service import SellerService

        self._catalog_service = catalog_service or CatalogService()
        self._order_service = OrderService(catalog_service=self._catalog_service)
        self._seller_service = SellerService(catalog_service=self._catalog_service)
        self._auth_service = auth_service or AuthService()
        self._user_service = user_service or UserService()

        logger.info("Service container initialized")

    def catalog_service(self):
        """Get CatalogService instance."""
        return self._catalog_service

    def order_service(self):
        """Get OrderService instance."""
        return self._order_service

    def seller_service(self):
        """Get SellerService instance."""
        return self._seller_service

    def auth_service(self):
        """Get AuthService instance."""
        return self._auth_service

    def user_service(self):
        """Get UserService instance."""
        return self._user_service


_container: Optional[ServiceContainer] = None


def configure_container(container: Optional[ServiceContainer] = None) -> ServiceContainer:
    """
    Install the process-wide container.

    Called from ``MarketplaceConfig.ready``. Tests may pass their own
    container built with substitute services.
    """
    global _container
    _container = container or ServiceContainer()
    return _container


def get_container() -> ServiceContainer:
    """Return the configured container, building the default one on first use."""
    if _container is None:
        return configure_container()
    return _container
