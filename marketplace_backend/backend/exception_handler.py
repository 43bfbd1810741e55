# backend/exception_handler.py

"""
API ERROR NORMALIZATION

Every error leaves the API in one envelope:

    {"error": {"code": "<CODE>", "message": "<text>"}}

Mapping:
- MarketplaceError subclasses -> their own code + http_status
- django ValidationError      -> 400 VALIDATION_ERROR
- django ProtectedError       -> 409 CONFLICT (row still referenced)
- DRF APIException            -> DRF status, envelope keeps DRF detail
- anything else               -> logged with traceback, 500 UNEXPECTED
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from backend.exceptions import MarketplaceError

logger = logging.getLogger(__name__)


def error_response(*, code: str, message, http_status: int) -> Response:
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def _django_validation_message(exc: DjangoValidationError):
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    return "; ".join(exc.messages)


def api_exception_handler(exc, context):
    if isinstance(exc, MarketplaceError):
        return error_response(
            code=exc.code,
            message=exc.message,
            http_status=exc.http_status,
        )

    if isinstance(exc, DjangoValidationError):
        return error_response(
            code="VALIDATION_ERROR",
            message=_django_validation_message(exc),
            http_status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, ProtectedError):
        return error_response(
            code="CONFLICT",
            message="Resource is still referenced and cannot be deleted.",
            http_status=status.HTTP_409_CONFLICT,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        code = getattr(exc, "default_code", "error")
        response.data = {
            "error": {
                "code": str(code).upper(),
                "message": response.data.get("detail", response.data)
                if isinstance(response.data, dict)
                else response.data,
            }
        }
        return response

    view = context.get("view")
    logger.exception(
        "Unhandled API error",
        extra={"view": view.__class__.__name__ if view else None},
    )
    return error_response(
        code="UNEXPECTED",
        message="An unexpected error occurred.",
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
