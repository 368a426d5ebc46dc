"""
Base classes and utilities for the service layer.

This module provides the ServiceResult pattern (inspired by Rust's Result type)
and BaseService class for all marketplace services.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

from marketplace.infra.observability.metrics import service_errors_total

T = TypeVar("T")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Expected failures (validation, authorization, missing records) are returned,
    never raised.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(order)
        >>> if result.ok:
        ...     return Response({"order": serialize(result.value)}, 200)

        >>> result = service_err("order_not_found", "Order not found")
        >>> print(result.error)  # "order_not_found"
        >>> print(result.error_detail)  # "Order not found"
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None

    def to_dict(self) -> dict:
        """
        Convert a failure to the JSON error payload.

        Returns:
            Dictionary with 'error' (code) and 'detail' (message)
        """
        if self.ok:
            raise ValueError("to_dict() is only defined for failed results")
        return {"error": self.error, "detail": self.error_detail}


def service_ok(value: T) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Example:
        >>> order = Order.objects.get(id=order_id)
        >>> return service_ok(order)
    """
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "order_not_found", "invalid_transition")
        error_detail: Human-readable error message

    Example:
        >>> return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator
    - Conversion of unexpected exceptions into opaque internal errors

    Usage:
        class CatalogService(BaseService):
            @BaseService.log_performance
            def list_products(self, seller_id=None):
                self.logger.info(f"Listing products for seller {seller_id}")
    """

    def __init__(self):
        """Initialize base service with logger."""
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs execution time and the error code of failed results.

        Example:
            @BaseService.log_performance
            def expensive_operation(self):
                ...
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper

    def internal_error(self, operation: str, exc: Exception, **context) -> ServiceResult:
        """
        Log an unexpected exception with its context and hide it behind an opaque error.

        Example:
            except Exception as e:
                return self.internal_error("get_order", e, order_id=order_id)
        """
        details = ", ".join(f"{key}={value}" for key, value in context.items())
        self.logger.error(f"Unexpected error in {operation} ({details}): {exc.__class__.__name__}: {exc}", exc_info=exc)
        service_errors_total.labels(service=self.__class__.__name__, operation=operation).inc()
        return service_err(ErrorCodes.INTERNAL_ERROR, UNEXPECTED_ERROR_MESSAGE)


# Common error codes for marketplace services
class ErrorCodes:
    """Standard error codes used across marketplace services."""

    # Request errors
    MALFORMED_REQUEST = "malformed_request"
    INVALID_ARGUMENT = "invalid_argument"
    ITEMS_INVALID = "items_invalid"

    # Lookup errors
    ORDER_NOT_FOUND = "order_not_found"
    PRODUCT_NOT_FOUND = "product_not_found"
    SELLER_NOT_FOUND = "seller_not_found"

    # Lifecycle errors
    INVALID_TRANSITION = "invalid_transition"
    ALREADY_FINAL = "already_final"

    # Permission errors
    FORBIDDEN = "forbidden"
    INVALID_FOR_ROLE = "invalid_for_role"

    # Consistency errors
    CONFLICT = "conflict"

    # Internal errors
    INTERNAL_ERROR = "internal_error"


def parse_uuid(value) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None when it is not a well-formed one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None
