from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import get_container
from marketplace.api.errors import error_response, validation_error_response
from marketplace.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    OrderListResponseSerializer,
    OrderResponseSerializer,
)
from marketplace.ordering.api.serializers.order_serializers import (
    OrderCreateRequestSerializer,
    OrderSerializer,
    OrderStatusUpdateRequestSerializer,
)
from marketplace.ordering.domain.services.order_service import OrderService
from utils.rbac import resolve_actor


ORDER_ERRORS = {
    403: OpenApiResponse(response=ErrorResponseSerializer, description="Forbidden, or not allowed for the role"),
    404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
}


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_value_regex = "[^/]+"

    def get_service(self) -> OrderService:
        return get_container().order_service()

    @extend_schema(
        operation_id="orders_list",
        summary="List orders visible to the caller",
        description="""
        **Scope by role:**
        - admin: every order
        - buyer: orders the buyer placed
        - seller: orders containing at least one of the seller's products

        Newest first, unpaginated.
        """,
        parameters=[
            OpenApiParameter(
                name="status",
                type=str,
                enum=["pending", "accepted", "delivered", "canceled"],
                description="Only orders with this status",
                required=False,
            ),
        ],
        responses={
            200: OpenApiResponse(response=OrderListResponseSerializer, description="Orders"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown status filter"),
        },
        tags=["Orders"],
    )
    def list(self, request):
        actor = resolve_actor(request.user)
        result = self.get_service().list_orders(actor, status=request.query_params.get("status"))

        if not result.ok:
            return error_response(result)

        return Response({"orders": OrderSerializer(result.value, many=True).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_create",
        summary="Place an order",
        description="""
        **What it receives:**
        - `items`: list of `{productId, quantity}`; at least one, every quantity >= 1

        **What it returns:**
        - The created order with status `pending`

        Every product must exist and be available. Availability is not reserved.
        """,
        request=OrderCreateRequestSerializer,
        examples=[
            OpenApiExample(
                "Two items",
                value={
                    "items": [
                        {"productId": "0c7f5b0e-4a53-4c5b-9d9c-1f6b8b8f1a11", "quantity": 2},
                        {"productId": "6d1e5f8a-7b2c-4f3e-8a9d-2c4b6e8f0a22", "quantity": 1},
                    ]
                },
                request_only=True,
            )
        ],
        responses={
            201: OpenApiResponse(response=OrderResponseSerializer, description="Order created"),
            400: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Missing items, bad quantity, unknown or unavailable product",
            ),
        },
        tags=["Orders"],
    )
    def create(self, request):
        serializer = OrderCreateRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        actor = resolve_actor(request.user)
        result = self.get_service().create_order(actor, serializer.validated_data.get("items"))

        if not result.ok:
            return error_response(result)

        return Response({"order": OrderSerializer(result.value).data}, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Get an order",
        responses={200: OpenApiResponse(response=OrderResponseSerializer, description="Order details"), **ORDER_ERRORS},
        tags=["Orders"],
    )
    def retrieve(self, request, pk=None):
        actor = resolve_actor(request.user)
        result = self.get_service().get_order(pk, actor)

        if not result.ok:
            return error_response(result)

        return Response({"order": OrderSerializer(result.value).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_update_status",
        summary="Change an order's status",
        description="""
        **Transitions:** pending -> accepted | canceled, accepted -> delivered | canceled.

        **By role:**
        - admin: any transition
        - buyer: only pending -> canceled on own orders
        - seller: pending -> accepted and accepted -> delivered on orders containing own products
        """,
        request=OrderStatusUpdateRequestSerializer,
        responses={
            200: OpenApiResponse(response=OrderResponseSerializer, description="Status changed"),
            400: OpenApiResponse(
                response=ErrorResponseSerializer, description="Missing/unknown status or invalid transition"
            ),
            **ORDER_ERRORS,
        },
        tags=["Orders"],
    )
    def update(self, request, pk=None):
        serializer = OrderStatusUpdateRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        actor = resolve_actor(request.user)
        result = self.get_service().update_status(pk, actor, serializer.validated_data["status"])

        if not result.ok:
            return error_response(result)

        return Response({"order": OrderSerializer(result.value).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_partial_update_status",
        summary="Change an order's status",
        request=OrderStatusUpdateRequestSerializer,
        responses={200: OpenApiResponse(response=OrderResponseSerializer, description="Status changed")},
        tags=["Orders"],
    )
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        operation_id="orders_delete",
        summary="Cancel an order",
        description="Same as `POST /orders/{id}/cancel/`; orders are never physically deleted.",
        request=None,
        responses={
            200: OpenApiResponse(response=OrderResponseSerializer, description="Order canceled"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Order already delivered or canceled"),
            **ORDER_ERRORS,
        },
        tags=["Orders"],
    )
    def destroy(self, request, pk=None):
        return self._cancel(request, pk)

    @extend_schema(
        operation_id="orders_cancel",
        summary="Cancel an order",
        description="""
        **By role:**
        - admin: pending or accepted orders
        - buyer: own pending orders
        - seller: pending or accepted orders containing own products
        """,
        request=None,
        responses={
            200: OpenApiResponse(response=OrderResponseSerializer, description="Order canceled"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Order already delivered or canceled"),
            **ORDER_ERRORS,
        },
        tags=["Orders"],
    )
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        return self._cancel(request, pk)

    def _cancel(self, request, pk):
        actor = resolve_actor(request.user)
        result = self.get_service().cancel_order(pk, actor)

        if not result.ok:
            return error_response(result)

        return Response({"order": OrderSerializer(result.value).data}, status=status.HTTP_200_OK)
