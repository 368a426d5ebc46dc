"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from marketplace.catalog.api.serializers.product_serializers import ProductSerializer
from marketplace.ordering.api.serializers.order_serializers import OrderSerializer
from marketplace.sellers.api.serializers.seller_serializers import SellerSerializer

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    error = serializers.CharField(help_text="Error code identifier")
    detail = serializers.CharField(help_text="Human-readable error message")


class MessageResponseSerializer(serializers.Serializer):
    """Generic success response"""

    message = serializers.CharField(help_text="Success message")


# ===== Product Response Serializers =====


class ProductResponseSerializer(serializers.Serializer):
    product = ProductSerializer()


class ProductListResponseSerializer(serializers.Serializer):
    products = ProductSerializer(many=True)


# ===== Order Response Serializers =====


class OrderResponseSerializer(serializers.Serializer):
    order = OrderSerializer()


class OrderListResponseSerializer(serializers.Serializer):
    orders = OrderSerializer(many=True)


# ===== Seller Response Serializers =====


class SellerListResponseSerializer(serializers.Serializer):
    sellers = SellerSerializer(many=True)
