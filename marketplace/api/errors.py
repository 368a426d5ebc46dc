"""
Mapping of service error codes to HTTP responses.

Every marketplace view renders failed ServiceResults through ``error_response``
so a given error code always produces the same status. Request bodies rejected
by a serializer go through ``validation_error_response``.
"""

from rest_framework import status
from rest_framework.response import Response

from marketplace.services.base import ErrorCodes, ServiceResult
from utils.validation import first_error_message


ERROR_STATUS = {
    ErrorCodes.MALFORMED_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.ITEMS_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.ALREADY_FINAL: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCodes.INVALID_FOR_ROLE: status.HTTP_403_FORBIDDEN,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.SELLER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCodes.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(result: ServiceResult) -> Response:
    """Render a failed result as ``{"error": code, "detail": message}``; unknown codes are 500."""
    http_status = ERROR_STATUS.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(result.to_dict(), status=http_status)


def validation_error_response(serializer) -> Response:
    """Render a failed ``serializer.is_valid()`` as a 400 with the first field error as detail."""
    return Response(
        {"error": ErrorCodes.MALFORMED_REQUEST, "detail": first_error_message(serializer.errors)},
        status=status.HTTP_400_BAD_REQUEST,
    )
