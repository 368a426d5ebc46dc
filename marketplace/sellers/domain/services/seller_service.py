"""
SellerService - Seller listing and public seller profiles

A seller profile aggregates the seller's products and the orders containing
them. Each order in the profile only shows the seller's own items, and the
sales statistics are computed over those filtered items.
"""

from typing import Any, Dict, List

from django.contrib.auth import get_user_model

from authentication.domain.identity import Role
from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.ordering.domain.models.order import Order
from marketplace.ordering.domain.state_machine import OrderStatus
from marketplace.services.base import (
    BaseService,
    ErrorCodes,
    ServiceResult,
    parse_uuid,
    service_err,
    service_ok,
)


User = get_user_model()


class SellerService(BaseService):
    def __init__(self, catalog_service: CatalogService):
        super().__init__()
        self.catalog_service = catalog_service

    @BaseService.log_performance
    def list_sellers(self) -> ServiceResult[List[Any]]:
        try:
            sellers = list(User.objects.filter(role=Role.SELLER.value).order_by("-date_joined"))
            return service_ok(sellers)
        except Exception as e:
            return self.internal_error("list_sellers", e)

    @BaseService.log_performance
    def get_seller_profile(self, seller_id) -> ServiceResult[Dict[str, Any]]:
        """
        Build the public profile of one seller.

        Returns:
            ServiceResult with::

                {
                    "seller": <user>,
                    "products": [<product>, ...],
                    "sales": {
                        "stats": {"ordersCount": int, "itemsSold": int, "deliveredCount": int},
                        "orders": [{"id", "status", "created_at", "updated_at", "items": [<seller's items>]}],
                    },
                }
        """
        seller_uuid = parse_uuid(seller_id)
        if seller_uuid is None:
            return service_err(ErrorCodes.INVALID_ARGUMENT, "Invalid seller id")

        try:
            seller = User.objects.filter(id=seller_uuid, role=Role.SELLER.value).first()
            if seller is None:
                return service_err(ErrorCodes.SELLER_NOT_FOUND, "Seller not found")

            products_result = self.catalog_service.list_products(seller_id=seller.id)
            if not products_result.ok:
                return products_result
            products = products_result.value

            product_ids = {product.id for product in products}
            orders = self._orders_with_products(product_ids)

            items_sold = 0
            delivered_count = 0
            order_views = []
            for order in orders:
                own_items = [item for item in order.items.all() if item.product_id in product_ids]
                items_sold += sum(item.quantity for item in own_items)
                if order.status == OrderStatus.DELIVERED.value:
                    delivered_count += 1
                order_views.append(
                    {
                        "id": order.id,
                        "status": order.status,
                        "created_at": order.created_at,
                        "updated_at": order.updated_at,
                        "items": own_items,
                    }
                )

            stats = {"ordersCount": len(orders), "itemsSold": items_sold, "deliveredCount": delivered_count}
            self.logger.info(f"Built profile for seller {seller.id}: {stats}")

            return service_ok(
                {
                    "seller": seller,
                    "products": products,
                    "sales": {"stats": stats, "orders": order_views},
                }
            )

        except Exception as e:
            return self.internal_error("get_seller_profile", e, seller_id=seller_id)

    def _orders_with_products(self, product_ids) -> List[Order]:
        if not product_ids:
            return []
        return list(
            Order.objects.filter(items__product_id__in=product_ids)
            .distinct()
            .prefetch_related("items")
            .order_by("-created_at")
        )
