"""
Marketplace Service Layer

Shared result type, error codes and base class for the marketplace domain
services. The services themselves live next to their domain:

- CatalogService: ``marketplace.catalog.domain.services.catalog_service``
- OrderService: ``marketplace.ordering.domain.services.order_service``
- SellerService: ``marketplace.sellers.domain.services.seller_service``

Usage:
    from marketplace.services import ErrorCodes, service_err, service_ok

    result = container.order_service().get_order(order_id, actor)
    if not result.ok and result.error == ErrorCodes.ORDER_NOT_FOUND:
        ...
"""

from .base import BaseService, ErrorCodes, ServiceResult, parse_uuid, service_err, service_ok

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    "parse_uuid",
    # Error codes
    "ErrorCodes",
]
