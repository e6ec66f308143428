"""
PATH: backend/exceptions.py

SERVICE ERRORS + API ERROR NORMALIZATION

Domain services raise ServiceError subclasses; views never build error
payloads by hand. The DRF exception handler below turns them into:

    {"error": {"code": "<CODE>", "message": "<human readable>"}}

Anything that is not a ServiceError (validation, auth, throttling) goes
through DRF's default handler unchanged.
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for all domain service failures."""

    code = "SERVICE_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "", *, code: str | None = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        if code:
            self.code = code


class NotFoundError(ServiceError):
    """Cart, order, coupon, product or user is absent."""

    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND


class CouponInvalidError(NotFoundError):
    """Coupon name unknown or already expired."""

    code = "COUPON_INVALID"


class InvalidInputError(ServiceError):
    """Malformed id, empty cart, non-positive computed total."""

    code = "INVALID_INPUT"
    http_status = status.HTTP_400_BAD_REQUEST


class PaymentVerificationError(ServiceError):
    """Webhook signature mismatch or unparseable signed payload."""

    code = "PAYMENT_VERIFICATION_FAILED"
    http_status = status.HTTP_400_BAD_REQUEST


class UpstreamError(ServiceError):
    """Payment gateway call failed. Not retried here."""

    code = "UPSTREAM_FAILURE"
    http_status = status.HTTP_502_BAD_GATEWAY


class InventoryAdjustmentError(ServiceError):
    """Raised by the strict inventory policy when a product is missing."""

    code = "INVENTORY_ADJUSTMENT_FAILED"
    http_status = status.HTTP_409_CONFLICT


def error_response(*, code: str, message: str, http_status: int) -> Response:
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def api_exception_handler(exc, context):
    if isinstance(exc, ServiceError):
        view = context.get("view")
        logger.info(
            "Service error surfaced to client",
            extra={
                "code": exc.code,
                "view": view.__class__.__name__ if view else None,
            },
        )
        return error_response(
            code=exc.code,
            message=exc.message,
            http_status=exc.http_status,
        )

    return exception_handler(exc, context)
