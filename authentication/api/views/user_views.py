"""
Admin user management endpoints.

Every action requires the admin role, re-validated against the database on
each request.
"""

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.api.serializers import AdminUserCreateSerializer, AdminUserUpdateSerializer, UserSerializer
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    MessageResponseSerializer,
    UserListResponseSerializer,
    UserResponseSerializer,
)
from authentication.permissions import AdminRequired
from infrastructure.container import get_container
from utils.rbac import resolve_actor

from .auth_views import error_response, validation_error_response

logger = logging.getLogger(__name__)


class UserAdminViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, AdminRequired]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_service(self):
        return get_container().user_service()

    @extend_schema(
        operation_id="admin_users_list",
        summary="List users",
        parameters=[OpenApiParameter("role", str, description="Only users with this role", required=False)],
        responses={
            200: OpenApiResponse(response=UserListResponseSerializer, description="All users, newest first"),
            403: OpenApiResponse(description="Admin role required"),
        },
        tags=["User administration"],
    )
    def list(self, request):
        result = self.get_service().list_users(role=request.query_params.get("role"))
        if not result.success:
            return error_response(result)
        return Response({"users": UserSerializer(result.data, many=True).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="admin_users_create",
        summary="Create a user with any role",
        request=AdminUserCreateSerializer,
        responses={
            201: OpenApiResponse(response=UserResponseSerializer, description="User created"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid fields"),
            403: OpenApiResponse(description="Admin role required"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email or username already in use"),
        },
        tags=["User administration"],
    )
    def create(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        result = self.get_service().create_user(serializer.validated_data)
        if not result.success:
            return error_response(result)
        return Response({"user": UserSerializer(result.data).data}, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="admin_users_retrieve",
        summary="Get a user",
        responses={
            200: OpenApiResponse(response=UserResponseSerializer, description="User details"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
        },
        tags=["User administration"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_user(pk)
        if not result.success:
            return error_response(result)
        return Response({"user": UserSerializer(result.data).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="admin_users_update",
        summary="Update username, email or role",
        request=AdminUserUpdateSerializer,
        responses={
            200: OpenApiResponse(response=UserResponseSerializer, description="User updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid fields"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email or username already in use"),
        },
        tags=["User administration"],
    )
    def update(self, request, pk=None):
        serializer = AdminUserUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        result = self.get_service().update_user(pk, serializer.validated_data)
        if not result.success:
            return error_response(result)
        return Response({"user": UserSerializer(result.data).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="admin_users_partial_update",
        summary="Partially update username, email or role",
        request=AdminUserUpdateSerializer,
        responses={200: OpenApiResponse(response=UserResponseSerializer, description="User updated")},
        tags=["User administration"],
    )
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        operation_id="admin_users_delete",
        summary="Delete a user",
        responses={
            200: OpenApiResponse(response=MessageResponseSerializer, description="User deleted"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
            409: OpenApiResponse(
                response=ErrorResponseSerializer, description="User owns products or orders, or is the caller"
            ),
        },
        tags=["User administration"],
    )
    def destroy(self, request, pk=None):
        actor = resolve_actor(request.user)
        result = self.get_service().delete_user(pk, actor)
        if not result.success:
            return error_response(result)
        return Response({"message": result.message}, status=status.HTTP_200_OK)
