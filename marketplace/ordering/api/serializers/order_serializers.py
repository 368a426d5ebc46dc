from rest_framework import serializers

from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.ordering.domain.state_machine import OrderStatus


class OrderItemSerializer(serializers.ModelSerializer):
    productId = serializers.UUIDField(source="product_id", read_only=True)

    class Meta:
        model = OrderItem
        fields = ["productId", "quantity"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    buyerId = serializers.UUIDField(source="buyer_id", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Order
        fields = ["id", "buyerId", "status", "items", "createdAt", "updatedAt"]
        read_only_fields = fields


# ===== Request bodies =====


class OrderCreateRequestSerializer(serializers.Serializer):
    """
    Request body for placing an order.

    Only the envelope is checked here. The items themselves are validated by
    OrderService so that a bad quantity or product answers ``items_invalid``.
    """

    items = serializers.ListField(
        required=False,
        allow_null=True,
        help_text="At least one {productId, quantity} object; quantity is an integer >= 1",
    )


class OrderStatusUpdateRequestSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=OrderStatus.choices(),
        help_text="Target status",
        error_messages={"required": "Status is required", "null": "Status is required"},
    )
