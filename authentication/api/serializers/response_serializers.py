"""
Response Serializers for API Documentation

These serializers define the structure of API responses for OpenAPI schema
generation. Request bodies are validated by the serializers in
``auth_serializers``.
"""

from rest_framework import serializers

from .auth_serializers import UserSerializer


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    error = serializers.CharField(help_text="Error code identifier")
    detail = serializers.CharField(help_text="Human-readable error message")


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField(help_text="Success message")


# ===== Authentication =====


class TokenPairResponseSerializer(serializers.Serializer):
    """Response for successful login or signup"""

    message = serializers.CharField(help_text="Success message")
    access = serializers.CharField(help_text="JWT access token")
    refresh = serializers.CharField(help_text="JWT refresh token")
    user = UserSerializer(help_text="User details")


# ===== User Administration =====


class UserResponseSerializer(serializers.Serializer):
    user = UserSerializer()


class UserListResponseSerializer(serializers.Serializer):
    users = UserSerializer(many=True)
