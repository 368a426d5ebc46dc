"""
OrderService - Order Lifecycle Management

Creates orders, lists and reads them within each role's scope, and moves them
along the status state machine under the per-role rule tables in
``marketplace.ordering.domain.policies``.
"""

from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction

from authentication.domain.identity import Actor
from authentication.infra.observability.tracing import tracer
from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.infra.observability.metrics import (
    order_authorization_denials_total,
    order_items_per_order,
    order_status_transitions_total,
    orders_placed_total,
)
from marketplace.ordering.domain import policies
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.ordering.domain.policies import PermissionDecision
from marketplace.ordering.domain.state_machine import OrderStatus, is_valid_transition, transition_error
from marketplace.services.base import (
    BaseService,
    ErrorCodes,
    ServiceResult,
    parse_uuid,
    service_err,
    service_ok,
)


ORDER_NOT_FOUND_MESSAGE = "Order not found"
QUANTITY_MESSAGE = "Quantity must be >= 1 for all items"

# Largest value OrderItem.quantity can store on every supported database
MAX_ORDER_QUANTITY = 2147483647


class OrderService(BaseService):
    """
    Service for managing order lifecycle.

    Depends on the product read interface of CatalogService for availability
    checks at creation and for seller ownership.
    """

    def __init__(self, catalog_service: CatalogService):
        """
        Initialize OrderService.

        Args:
            catalog_service: Product directory (injected)
        """
        super().__init__()
        self.catalog_service = catalog_service

    @BaseService.log_performance
    def create_order(self, actor: Actor, items) -> ServiceResult[Order]:
        """
        Place an order for the acting user.

        Business Logic:
        1. At least one item is required
        2. Every quantity is an integer in 1..MAX_ORDER_QUANTITY and every product id a UUID
        3. All distinct products exist (one batch lookup) and are available
        4. Order and items are written in one transaction, status pending

        Args:
            actor: The buyer of record
            items: List of {"productId": <uuid>, "quantity": <int>}

        Returns:
            ServiceResult with the created Order

        Example:
            >>> result = order_service.create_order(actor, [{"productId": str(lamp.id), "quantity": 2}])
            >>> result.value.status
            'pending'
        """
        with tracer.start_as_current_span("order.create") as span:
            span.set_attribute("actor.id", str(actor.id))
            span.set_attribute("actor.role", actor.role.value)

            try:
                parsed, error = self._parse_items(items)
                if error:
                    orders_placed_total.labels(status="rejected").inc()
                    return error

                requested_ids = {product_id for product_id, _ in parsed}
                with tracer.start_as_current_span("order.lookup_products"):
                    products = {product.id: product for product in self.catalog_service.find_by_ids(requested_ids)}

                if len(products) != len(requested_ids):
                    orders_placed_total.labels(status="rejected").inc()
                    return service_err(ErrorCodes.ITEMS_INVALID, "One or more products do not exist")

                for product_id, _ in parsed:
                    if not products[product_id].available:
                        orders_placed_total.labels(status="rejected").inc()
                        return service_err(ErrorCodes.ITEMS_INVALID, f"Product {product_id} is not available")

                with tracer.start_as_current_span("order.save"), transaction.atomic():
                    order = Order.objects.create(buyer_id=actor.id, status=OrderStatus.PENDING.value)
                    OrderItem.objects.bulk_create(
                        [
                            OrderItem(order=order, product=products[product_id], quantity=quantity, position=position)
                            for position, (product_id, quantity) in enumerate(parsed)
                        ]
                    )

                orders_placed_total.labels(status="success").inc()
                order_items_per_order.observe(len(parsed))
                span.set_attribute("order.id", str(order.id))
                self.logger.info(f"Created order {order.id} for {actor.role.value} {actor.id}: {len(parsed)} items")

                return service_ok(self._reload(order.id))

            except Exception as e:
                span.record_exception(e)
                orders_placed_total.labels(status="failure").inc()
                return self.internal_error("create_order", e, actor_id=actor.id)

    @BaseService.log_performance
    def list_orders(self, actor: Actor, status: Optional[str] = None) -> ServiceResult[List[Order]]:
        """
        List the orders visible to the actor, newest first.

        Admins see every order, buyers the orders they placed, sellers every
        order containing at least one of their products.

        Args:
            actor: The caller
            status: Optional status filter
        """
        status_filter = None
        if status is not None:
            status_filter = OrderStatus.parse(status)
            if status_filter is None:
                return service_err(
                    ErrorCodes.MALFORMED_REQUEST,
                    f"Unknown order status '{status}'. Expected one of: {', '.join(OrderStatus.values())}",
                )

        with tracer.start_as_current_span("order.list") as span:
            span.set_attribute("actor.role", actor.role.value)
            try:
                queryset = Order.objects.prefetch_related("items")

                if actor.is_buyer:
                    queryset = queryset.filter(buyer_id=actor.id)
                elif actor.is_seller:
                    product_ids = self.catalog_service.seller_product_ids(actor.id)
                    queryset = queryset.filter(items__product_id__in=product_ids).distinct()

                if status_filter is not None:
                    queryset = queryset.filter(status=status_filter.value)

                orders = list(queryset.order_by("-created_at"))
                self.logger.info(f"Listed {len(orders)} orders for {actor.role.value} {actor.id}")
                return service_ok(orders)

            except Exception as e:
                span.record_exception(e)
                return self.internal_error("list_orders", e, actor_id=actor.id)

    @BaseService.log_performance
    def get_order(self, order_id, actor: Actor) -> ServiceResult[Order]:
        """
        Get one order.

        Unknown and malformed ids are both reported as not found.
        """
        with tracer.start_as_current_span("order.get") as span:
            span.set_attribute("order.id", str(order_id))
            try:
                order = self._find(order_id)
                if order is None:
                    return service_err(ErrorCodes.ORDER_NOT_FOUND, ORDER_NOT_FOUND_MESSAGE)

                decision = policies.authorize_view(actor, owns=lambda: self._owns(actor, order))
                if not decision.allowed:
                    return self._denied("get_order", actor, order, decision)

                return service_ok(order)

            except Exception as e:
                span.record_exception(e)
                return self.internal_error("get_order", e, order_id=order_id, actor_id=actor.id)

    @BaseService.log_performance
    def update_status(self, order_id, actor: Actor, requested_status) -> ServiceResult[Order]:
        """
        Move an order to ``requested_status``.

        Order of checks:
        1. requested status is one of the four statuses
        2. order exists
        3. the edge exists in the state machine (for every role)
        4. the role rules for that edge, ownership first
        """
        if requested_status in (None, ""):
            return service_err(ErrorCodes.MALFORMED_REQUEST, "Status is required")
        target = OrderStatus.parse(requested_status)
        if target is None:
            return service_err(
                ErrorCodes.MALFORMED_REQUEST,
                f"Invalid status '{requested_status}'. Expected one of: {', '.join(OrderStatus.values())}",
            )

        with tracer.start_as_current_span("order.update_status") as span:
            span.set_attribute("order.id", str(order_id))
            span.set_attribute("order.target_status", target.value)
            try:
                order = self._find(order_id)
                if order is None:
                    return service_err(ErrorCodes.ORDER_NOT_FOUND, ORDER_NOT_FOUND_MESSAGE)

                current = OrderStatus(order.status)
                if not is_valid_transition(current, target):
                    return service_err(ErrorCodes.INVALID_TRANSITION, transition_error(current, target))

                decision = policies.authorize_status_change(
                    actor, current, target, owns=lambda: self._owns(actor, order)
                )
                if not decision.allowed:
                    return self._denied("update_status", actor, order, decision)

                return service_ok(self._apply(order, target, actor))

            except Exception as e:
                span.record_exception(e)
                return self.internal_error("update_status", e, order_id=order_id, actor_id=actor.id)

    @BaseService.log_performance
    def cancel_order(self, order_id, actor: Actor) -> ServiceResult[Order]:
        """
        Cancel an order under the cancellation rules.

        Sellers may cancel accepted orders here even though the accepted to
        canceled edge is refused to them through update_status.
        """
        with tracer.start_as_current_span("order.cancel") as span:
            span.set_attribute("order.id", str(order_id))
            try:
                order = self._find(order_id)
                if order is None:
                    return service_err(ErrorCodes.ORDER_NOT_FOUND, ORDER_NOT_FOUND_MESSAGE)

                decision = policies.authorize_cancel(actor, order.status, owns=lambda: self._owns(actor, order))
                if not decision.allowed:
                    return self._denied("cancel_order", actor, order, decision)

                return service_ok(self._apply(order, OrderStatus.CANCELED, actor))

            except Exception as e:
                span.record_exception(e)
                return self.internal_error("cancel_order", e, order_id=order_id, actor_id=actor.id)

    # ----- Helpers ----------------------------------------------------------

    def _parse_items(self, items) -> Tuple[List[Tuple[Any, int]], Optional[ServiceResult]]:
        """Normalize raw request items to (product uuid, quantity) pairs in request order."""
        if not items or not isinstance(items, list):
            return [], service_err(ErrorCodes.MALFORMED_REQUEST, "Items are required")

        for item in items:
            if not isinstance(item, dict):
                return [], service_err(ErrorCodes.ITEMS_INVALID, "Each item needs a productId and a quantity")
            quantity = item.get("quantity")
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                return [], service_err(ErrorCodes.ITEMS_INVALID, QUANTITY_MESSAGE)
            if quantity > MAX_ORDER_QUANTITY:
                return [], service_err(ErrorCodes.ITEMS_INVALID, f"Quantity must be at most {MAX_ORDER_QUANTITY}")

        parsed = []
        for item in items:
            product_id = parse_uuid(self._raw_product_id(item))
            if product_id is None:
                return [], service_err(ErrorCodes.ITEMS_INVALID, "Invalid product id")
            parsed.append((product_id, item["quantity"]))
        return parsed, None

    def _raw_product_id(self, item: Dict[str, Any]):
        if "productId" in item:
            return item["productId"]
        return item.get("product_id")

    def _find(self, order_id) -> Optional[Order]:
        order_uuid = parse_uuid(order_id)
        if order_uuid is None:
            return None
        return Order.objects.prefetch_related("items").filter(id=order_uuid).first()

    def _reload(self, order_id) -> Order:
        return Order.objects.prefetch_related("items").get(id=order_id)

    def _owns(self, actor: Actor, order: Order) -> bool:
        seller_products = self.catalog_service.seller_product_ids(actor.id) if actor.is_seller else frozenset()
        return policies.owns_order(actor, order, seller_products)

    def _apply(self, order: Order, target: OrderStatus, actor: Actor) -> Order:
        """Persist a status change as a single-row update."""
        previous = order.status
        order.status = target.value
        order.save(update_fields=["status", "updated_at"])

        order_status_transitions_total.labels(
            from_status=previous, to_status=target.value, role=actor.role.value
        ).inc()
        self.logger.info(f"Order {order.id}: {previous} -> {target.value} by {actor.role.value} {actor.id}")
        return order

    def _denied(self, operation: str, actor: Actor, order: Order, decision: PermissionDecision) -> ServiceResult:
        order_authorization_denials_total.labels(operation=operation, error=decision.error).inc()
        self.logger.warning(
            f"{operation} denied for {actor.role.value} {actor.id} on order {order.id} "
            f"(status={order.status}): {decision.error}"
        )
        return service_err(decision.error, decision.detail)
