from marketplace.catalog.api.views.product_views import ProductViewSet
from marketplace.ordering.api.views.order_views import OrderViewSet
from marketplace.sellers.api.views.seller_views import SellerViewSet

__all__ = [
    "OrderViewSet",
    "ProductViewSet",
    "SellerViewSet",
]
