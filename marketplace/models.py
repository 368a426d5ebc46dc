from marketplace.catalog.domain.models.product import Product
from marketplace.ordering.domain.models.order import Order, OrderItem

__all__ = [
    "Product",
    "Order",
    "OrderItem",
]
