"""
Base classes and utilities for the service layer.

Every domain service (authentication, marketplace, payment_system, support,
dashboards) returns a ServiceResult for expected outcomes and reserves
exceptions for the unexpected. Views translate error codes to HTTP statuses
with ``error_status``.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

from rest_framework import status
from rest_framework.response import Response


T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code from ErrorCodes (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(repo)
        >>> if not result.ok:
        ...     return Response({"detail": result.error_detail}, status=error_status(result.error))
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


def service_ok(value: T = None) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Example:
        >>> return service_ok({"order_id": str(order.id)})
    """
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Example:
        >>> return service_err(ErrorCodes.NOT_FOUND, f"Repo {repo_id} does not exist")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services providing common functionality.

    Usage:
        class PayoutRequestService(BaseService):
            def __init__(self, payment_provider):
                super().__init__()
                self.payment_provider = payment_provider

            @BaseService.log_performance
            def create_payout_request(self, user, total_amount):
                ...
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator logging the duration of a service method.

        Failed ServiceResults are logged as warnings; exceptions are logged
        with their traceback and re-raised.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000

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


class ServiceError(Exception):
    """
    Raised inside a transaction to abort it with a specific error code.

    Services catch it at the transaction boundary and convert it back into
    a failed ServiceResult, so the rollback and the error travel together.
    """

    def __init__(self, code: str, detail: str = ""):
        super().__init__(detail or code)
        self.code = code
        self.detail = detail or code

    def to_result(self) -> ServiceResult:
        return service_err(self.code, self.detail)


class ErrorCodes:
    """Standard error codes used across services."""

    # Generic
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    INVALID_OPERATION = "invalid_operation"
    INVALID_STATE = "invalid_state"
    INTERNAL_ERROR = "internal_error"
    DATABASE_ERROR = "database_error"

    # Authentication
    EMAIL_EXISTS = "email_exists"
    INVALID_CREDENTIALS = "invalid_credentials"
    USER_BANNED = "user_banned"
    ALREADY_VERIFIED = "already_verified"
    INVALID_CODE = "invalid_code"
    CODE_EXPIRED = "code_expired"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"
    PROFILE_EXISTS = "profile_exists"

    # Sellers
    SELLER_NOT_FOUND = "seller_not_found"
    SELLER_NOT_APPROVED = "seller_not_approved"
    ONBOARDING_INCOMPLETE = "onboarding_incomplete"
    INVALID_DOCUMENT = "invalid_document"

    # Catalog / orders
    PRODUCT_NOT_FOUND = "product_not_found"
    ORDER_NOT_FOUND = "order_not_found"
    INVALID_ORDER_STATE = "invalid_order_state"
    ALREADY_PURCHASED = "already_purchased"
    NOT_PRODUCT_OWNER = "not_product_owner"

    # Payments
    INVALID_PAYMENT_DATA = "invalid_payment_data"
    PAYMENT_NOT_SUCCEEDED = "payment_not_succeeded"
    PAYMENT_PROVIDER_ERROR = "payment_provider_error"
    STORAGE_ERROR = "storage_error"
    CODE_CHECK_FAILED = "code_check_failed"

    # Payouts
    COOLDOWN_ACTIVE = "cooldown_active"
    BELOW_MINIMUM = "below_minimum"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    NO_PAYOUT_DESTINATION = "no_payout_destination"


_ERROR_STATUS = {
    ErrorCodes.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.SELLER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCodes.NOT_PRODUCT_OWNER: status.HTTP_403_FORBIDDEN,
    ErrorCodes.USER_BANNED: status.HTTP_403_FORBIDDEN,
    ErrorCodes.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCodes.EMAIL_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCodes.PROFILE_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCodes.ALREADY_PURCHASED: status.HTTP_409_CONFLICT,
    ErrorCodes.PAYMENT_PROVIDER_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCodes.STORAGE_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCodes.CODE_CHECK_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorCodes.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCodes.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_status(error: Optional[str]) -> int:
    """Map an error code to an HTTP status; business-rule errors are 400."""
    return _ERROR_STATUS.get(error, status.HTTP_400_BAD_REQUEST)


def error_response_body(result: ServiceResult) -> dict:
    return {"detail": result.error_detail, "error": result.error}


def error_response(result: ServiceResult) -> Response:
    """DRF response for a failed ServiceResult."""
    return Response(error_response_body(result), status=error_status(result.error))
