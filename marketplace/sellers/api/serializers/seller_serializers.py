from django.contrib.auth import get_user_model
from rest_framework import serializers

from marketplace.catalog.api.serializers.product_serializers import ProductSerializer
from marketplace.ordering.api.serializers.order_serializers import OrderItemSerializer

User = get_user_model()


class SellerSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "email", "createdAt"]
        read_only_fields = fields


class SellerOrderSerializer(serializers.Serializer):
    """An order as seen from one seller: only that seller's items"""

    id = serializers.UUIDField()
    status = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    items = OrderItemSerializer(many=True)


class SellerStatsSerializer(serializers.Serializer):
    ordersCount = serializers.IntegerField(help_text="Orders containing at least one of the seller's products")
    itemsSold = serializers.IntegerField(help_text="Sum of quantities of the seller's items in those orders")
    deliveredCount = serializers.IntegerField(help_text="How many of those orders were delivered")


class SellerSalesSerializer(serializers.Serializer):
    stats = SellerStatsSerializer()
    orders = SellerOrderSerializer(many=True)


class SellerProfileSerializer(serializers.Serializer):
    seller = SellerSerializer()
    products = ProductSerializer(many=True)
    sales = SellerSalesSerializer()
