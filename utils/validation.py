"""
Helpers for turning DRF serializer errors into the ``{"error", "detail"}`` body.
"""

from rest_framework.settings import api_settings


def first_error_message(errors, field: str = "") -> str:
    """
    Flatten ``serializer.errors`` to the first message, prefixed with its field path.

    Example:
        >>> first_error_message({"items": [{}, {"quantity": ["Ensure this value is greater than or equal to 1."]}]})
        'items[1].quantity: Ensure this value is greater than or equal to 1.'
    """
    if isinstance(errors, dict):
        for key, value in errors.items():
            if key == api_settings.NON_FIELD_ERRORS_KEY:
                path = field
            else:
                path = f"{field}.{key}" if field else str(key)
            message = first_error_message(value, path)
            if message:
                return message
        return ""

    if isinstance(errors, (list, tuple)):
        for index, value in enumerate(errors):
            path = f"{field}[{index}]" if isinstance(value, dict) else field
            message = first_error_message(value, path)
            if message:
                return message
        return ""

    return f"{field}: {errors}" if field else str(errors)
