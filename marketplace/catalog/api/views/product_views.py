from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import SellerRequired
from infrastructure.container import get_container
from marketplace.api.errors import error_response, validation_error_response
from marketplace.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    MessageResponseSerializer,
    ProductListResponseSerializer,
    ProductResponseSerializer,
)
from marketplace.catalog.api.serializers.product_serializers import (
    ProductCreateRequestSerializer,
    ProductSerializer,
    ProductUpdateRequestSerializer,
)
from marketplace.catalog.domain.services.catalog_service import CatalogService
from utils.rbac import resolve_actor


def _parse_bool(value):
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    return None


class ProductViewSet(viewsets.ViewSet):
    lookup_value_regex = "[^/]+"

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [AllowAny()]
        return [IsAuthenticated(), SellerRequired()]

    def get_service(self) -> CatalogService:
        return get_container().catalog_service()

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        parameters=[
            OpenApiParameter(name="seller", type=str, description="Only products of this seller", required=False),
            OpenApiParameter(name="available", type=bool, description="Filter by availability", required=False),
        ],
        responses={
            200: OpenApiResponse(response=ProductListResponseSerializer, description="Products, newest first"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Malformed seller id"),
        },
        tags=["Products"],
    )
    def list(self, request):
        result = self.get_service().list_products(
            seller_id=request.query_params.get("seller"),
            available=_parse_bool(request.query_params.get("available")),
        )
        if not result.ok:
            return error_response(result)
        return Response({"products": ProductSerializer(result.value, many=True).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get a product",
        responses={
            200: OpenApiResponse(response=ProductResponseSerializer, description="Product details"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Products"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk)
        if not result.ok:
            return error_response(result)
        return Response({"product": ProductSerializer(result.value).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="products_create",
        summary="Create a product (seller or admin)",
        request=ProductCreateRequestSerializer,
        responses={
            201: OpenApiResponse(response=ProductResponseSerializer, description="Product created"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing name/price or invalid value"),
            403: OpenApiResponse(description="Seller or admin role required"),
        },
        tags=["Products"],
    )
    def create(self, request):
        serializer = ProductCreateRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        actor = resolve_actor(request.user)
        result = self.get_service().create_product(actor, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(
            {"message": "Product created", "product": ProductSerializer(result.value).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="products_update",
        summary="Update a product (owner or admin)",
        request=ProductUpdateRequestSerializer,
        responses={
            200: OpenApiResponse(response=ProductResponseSerializer, description="Product updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid value"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the product owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Products"],
    )
    def update(self, request, pk=None):
        serializer = ProductUpdateRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        actor = resolve_actor(request.user)
        result = self.get_service().update_product(pk, actor, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response({"product": ProductSerializer(result.value).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="products_partial_update",
        summary="Partially update a product (owner or admin)",
        request=ProductUpdateRequestSerializer,
        responses={200: OpenApiResponse(response=ProductResponseSerializer, description="Product updated")},
        tags=["Products"],
    )
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        operation_id="products_delete",
        summary="Delete a product (owner or admin)",
        responses={
            200: OpenApiResponse(response=MessageResponseSerializer, description="Product deleted"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the product owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Product is referenced by orders; mark it unavailable instead",
            ),
        },
        tags=["Products"],
    )
    def destroy(self, request, pk=None):
        actor = resolve_actor(request.user)
        result = self.get_service().delete_product(pk, actor)
        if not result.ok:
            return error_response(result)
        return Response({"message": "Product deleted"}, status=status.HTTP_200_OK)
