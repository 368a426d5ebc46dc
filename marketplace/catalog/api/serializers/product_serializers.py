from decimal import Decimal

from rest_framework import serializers

from marketplace.catalog.domain.models.product import Product


class ProductSerializer(serializers.ModelSerializer):
    sellerId = serializers.UUIDField(source="seller_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = ["id", "sellerId", "name", "description", "price", "available", "createdAt", "updatedAt"]
        read_only_fields = fields


class ProductCreateRequestSerializer(serializers.Serializer):
    """
    Request body for creating or updating a product.

    Updates validate with ``partial=True``; at least one field must be present.
    """

    name = serializers.CharField(max_length=200, help_text="Product name")
    description = serializers.CharField(
        help_text="Product description", required=False, allow_blank=True, default=""
    )
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01"), help_text="Price, greater than 0"
    )
    available = serializers.BooleanField(default=True, help_text="Whether the product can be ordered")

    def validate(self, attrs):
        if self.partial and not attrs:
            raise serializers.ValidationError("Provide at least one of name, description, price or available")
        return attrs


class ProductUpdateRequestSerializer(ProductCreateRequestSerializer):
    """Request body for updating a product; every field is optional"""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("partial", True)
        super().__init__(*args, **kwargs)
