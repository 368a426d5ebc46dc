"""
CatalogService - Product CRUD and the product read interface

Public product browsing, seller/admin product management, and the two lookups
the order engine and the seller aggregation depend on (``find_by_ids`` and
``seller_product_ids``).
"""

from typing import Any, Dict, Iterable, List, Optional, Set

from django.db import transaction
from django.db.models import ProtectedError

from authentication.domain.identity import Actor
from marketplace.catalog.domain.models.product import Product
from marketplace.infra.observability.metrics import product_mutations_total
from marketplace.services.base import (
    BaseService,
    ErrorCodes,
    ServiceResult,
    parse_uuid,
    service_err,
    service_ok,
)


PRODUCT_NOT_FOUND_MESSAGE = "Product not found"


class CatalogService(BaseService):
    """
    Service for managing the product catalog.

    Responsibilities:
    - List and get products (public)
    - Create products (sellers and admins)
    - Update and delete products (owning seller or admin)
    - Batch lookups used by the order engine

    CRUD operations validate permissions and return ServiceResult; the read
    interface returns plain values.
    """

    # ----- Read interface -------------------------------------------------

    def find_by_ids(self, product_ids: Iterable) -> List[Product]:
        """
        Fetch all products with the given ids in one query.

        Unknown ids are simply absent from the result; callers compare lengths.
        """
        ids = {parse_uuid(product_id) for product_id in product_ids}
        ids.discard(None)
        if not ids:
            return []
        return list(Product.objects.filter(id__in=ids))

    def seller_product_ids(self, seller_id) -> Set:
        """Ids of every product owned by ``seller_id``, available or not."""
        return set(Product.objects.filter(seller_id=seller_id).values_list("id", flat=True))

    # ----- Public browsing --------------------------------------------------

    @BaseService.log_performance
    def list_products(self, seller_id=None, available: Optional[bool] = None) -> ServiceResult[List[Product]]:
        """
        List products, newest first.

        Args:
            seller_id: Optional owner filter
            available: Optional availability filter

        Returns:
            ServiceResult with the list of products
        """
        try:
            queryset = Product.objects.select_related("seller")

            if seller_id is not None:
                seller_uuid = parse_uuid(seller_id)
                if seller_uuid is None:
                    return service_err(ErrorCodes.INVALID_ARGUMENT, "Invalid seller id")
                queryset = queryset.filter(seller_id=seller_uuid)

            if available is not None:
                queryset = queryset.filter(available=available)

            products = list(queryset.order_by("-created_at"))
            self.logger.info(f"Listed {len(products)} products (seller={seller_id}, available={available})")
            return service_ok(products)

        except Exception as e:
            return self.internal_error("list_products", e, seller_id=seller_id)

    @BaseService.log_performance
    def get_product(self, product_id) -> ServiceResult[Product]:
        product_uuid = parse_uuid(product_id)
        if product_uuid is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, PRODUCT_NOT_FOUND_MESSAGE)

        try:
            return service_ok(Product.objects.select_related("seller").get(id=product_uuid))
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, PRODUCT_NOT_FOUND_MESSAGE)
        except Exception as e:
            return self.internal_error("get_product", e, product_id=product_id)

    # ----- Management -------------------------------------------------------

    @BaseService.log_performance
    def create_product(self, actor: Actor, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Create a new product owned by the acting seller (or admin).

        Args:
            actor: The caller; buyers are refused
            data: Validated product fields (name, price, description, available)

        Example:
            >>> result = catalog_service.create_product(
            ...     actor,
            ...     data={"name": "Lamp", "description": "Oak desk lamp", "price": Decimal("49.90")},
            ... )
        """
        if not (actor.is_seller or actor.is_admin):
            product_mutations_total.labels(action="create", status="forbidden").inc()
            return service_err(ErrorCodes.FORBIDDEN, "Only sellers can create products")

        try:
            product = Product.objects.create(seller_id=actor.id, **data)
        except Exception as e:
            product_mutations_total.labels(action="create", status="error").inc()
            return self.internal_error("create_product", e, actor_id=actor.id)

        product_mutations_total.labels(action="create", status="success").inc()
        self.logger.info(f"Created product: {product.name} (id={product.id}) by {actor.role.value} {actor.id}")
        return service_ok(product)

    @BaseService.log_performance
    @transaction.atomic
    def update_product(self, product_id, actor: Actor, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Update name, description, price and/or availability (owner or admin).

        Example:
            >>> catalog_service.update_product(product_id, actor, {"available": False})
        """
        found = self._load_owned(product_id, actor, action="update")
        if not found.ok:
            return found
        product = found.value

        try:
            for field, value in data.items():
                setattr(product, field, value)
            product.save(update_fields=[*data.keys(), "updated_at"])
        except Exception as e:
            product_mutations_total.labels(action="update", status="error").inc()
            return self.internal_error("update_product", e, product_id=product_id)

        product_mutations_total.labels(action="update", status="success").inc()
        self.logger.info(f"Updated product {product.id}, fields={sorted(data)}")
        return service_ok(product)

    @BaseService.log_performance
    def delete_product(self, product_id, actor: Actor) -> ServiceResult[bool]:
        """
        Delete a product (owner or admin).

        Products referenced by an order stay; the caller should mark them
        unavailable instead.
        """
        found = self._load_owned(product_id, actor, action="delete")
        if not found.ok:
            return found
        product = found.value

        try:
            product.delete()
        except ProtectedError:
            product_mutations_total.labels(action="delete", status="conflict").inc()
            return service_err(ErrorCodes.CONFLICT, "Product is referenced by existing orders")
        except Exception as e:
            product_mutations_total.labels(action="delete", status="error").inc()
            return self.internal_error("delete_product", e, product_id=product_id)

        product_mutations_total.labels(action="delete", status="success").inc()
        self.logger.info(f"Deleted product {product_id} by {actor.role.value} {actor.id}")
        return service_ok(True)

    # ----- Helpers ----------------------------------------------------------

    def _load_owned(self, product_id, actor: Actor, action: str) -> ServiceResult[Product]:
        result = self.get_product(product_id)
        if not result.ok:
            return result

        product = result.value
        if not actor.is_admin and product.seller_id != actor.id:
            product_mutations_total.labels(action=action, status="forbidden").inc()
            self.logger.warning(f"Product {action} denied: {actor.role.value} {actor.id} does not own {product.id}")
            return service_err(ErrorCodes.FORBIDDEN, "You do not own this product")
        return result
