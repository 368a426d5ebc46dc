from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import LoginSerializer, SignupSerializer, UserSerializer
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    TokenPairResponseSerializer,
    UserResponseSerializer,
)
from authentication.domain.services.results import AuthErrorCodes
from infrastructure.container import get_container
from utils.validation import first_error_message


ERROR_STATUS = {
    AuthErrorCodes.MALFORMED_REQUEST: status.HTTP_400_BAD_REQUEST,
    AuthErrorCodes.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCodes.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AuthErrorCodes.CONFLICT: status.HTTP_409_CONFLICT,
    AuthErrorCodes.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(result) -> Response:
    """Render a failed service result as ``{"error", "detail"}`` with the mapped status."""
    http_status = ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST)
    return Response({"error": result.error_code, "detail": result.error}, status=http_status)


def validation_error_response(serializer) -> Response:
    """Render serializer errors as a ``malformed_request`` 400 naming the first bad field."""
    return Response(
        {"error": AuthErrorCodes.MALFORMED_REQUEST, "detail": first_error_message(serializer.errors)},
        status=status.HTTP_400_BAD_REQUEST,
    )


def get_auth_service():
    return get_container().auth_service()


class SignupAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_signup",
        summary="Register a new buyer account",
        description="""
        Create a buyer account and log it in.

        The response carries a JWT access/refresh pair; the role of a signed-up
        account is always `buyer`. Sellers and admins are created by an admin.
        """,
        request=SignupSerializer,
        responses={
            201: OpenApiResponse(
                response=TokenPairResponseSerializer,
                description="Signup successful",
                examples=[
                    OpenApiExample(
                        "Successful Signup",
                        value={
                            "message": "Signup successful",
                            "access": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "refresh": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "user": {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "username": "newbuyer",
                                "email": "newbuyer@example.com",
                                "role": "buyer",
                            },
                        },
                    )
                ],
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing fields or invalid email"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email or username already in use"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        result = get_auth_service().signup(
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
            username=serializer.validated_data["username"],
        )

        if not result.success:
            return error_response(result)

        return Response(
            {
                "message": result.message,
                "access": result.access_token,
                "refresh": result.refresh_token,
                "user": UserSerializer(result.user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        description="Authenticate with email and password and receive a JWT access/refresh pair.",
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(response=TokenPairResponseSerializer, description="Login successful"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Email or password missing"),
            401: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Invalid credentials",
                examples=[
                    OpenApiExample(
                        "Invalid Credentials",
                        value={"error": "invalid_credentials", "detail": "Invalid credentials"},
                    )
                ],
            ),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        result = get_auth_service().login(serializer.validated_data["email"], serializer.validated_data["password"])

        if not result.success:
            return error_response(result)

        return Response(
            {
                "message": result.message,
                "access": result.access_token,
                "refresh": result.refresh_token,
                "user": UserSerializer(result.user).data,
            },
            status=status.HTTP_200_OK,
        )


class ProfileAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_profile",
        summary="Current user profile",
        responses={
            200: OpenApiResponse(response=UserResponseSerializer, description="The authenticated user"),
            401: OpenApiResponse(description="Authentication required"),
        },
        tags=["Authentication"],
    )
    def get(self, request):
        return Response({"user": UserSerializer(request.user).data}, status=status.HTTP_200_OK)
