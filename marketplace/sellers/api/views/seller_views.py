from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from infrastructure.container import get_container
from marketplace.api.errors import error_response
from marketplace.api.serializers.response_serializers import ErrorResponseSerializer, SellerListResponseSerializer
from marketplace.sellers.api.serializers.seller_serializers import SellerProfileSerializer, SellerSerializer
from marketplace.sellers.domain.services.seller_service import SellerService


class SellerViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]
    lookup_value_regex = "[^/]+"

    def get_service(self) -> SellerService:
        return get_container().seller_service()

    @extend_schema(
        operation_id="sellers_list",
        summary="List sellers",
        responses={200: OpenApiResponse(response=SellerListResponseSerializer, description="All sellers")},
        tags=["Sellers"],
    )
    def list(self, request):
        result = self.get_service().list_sellers()
        if not result.ok:
            return error_response(result)
        return Response({"sellers": SellerSerializer(result.value, many=True).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="sellers_retrieve",
        summary="Seller profile with sales statistics",
        description="""
        **What it returns:**
        - `seller`: public seller details
        - `products`: every product of the seller
        - `sales.stats`: `ordersCount`, `itemsSold`, `deliveredCount`
        - `sales.orders`: orders containing the seller's products, showing only the seller's items
        """,
        responses={
            200: OpenApiResponse(response=SellerProfileSerializer, description="Seller profile"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid seller id"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Seller not found"),
        },
        tags=["Sellers"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_seller_profile(pk)
        if not result.ok:
            return error_response(result)
        return Response(SellerProfileSerializer(result.value).data, status=status.HTTP_200_OK)
