"""DRF exception handler mapping domain errors to HTTP responses.

Domain errors carry a stable code and a user-safe message; nothing else
about the failure leaks to the client.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from common.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PURCHASE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ARTWORK_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CODE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.UNKNOWN_TICKET: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TICKET_UNAVAILABLE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ARTWORK_UNAVAILABLE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCOUNT_DISABLED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.DUPLICATE_KEY: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_CODE: status.HTTP_409_CONFLICT,
    ErrorCode.TICKET_IN_USE: status.HTTP_409_CONFLICT,
    ErrorCode.ENCODING_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.UPSTREAM_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


def error_body(code: ErrorCode, message: str) -> dict:
    return {"error": {"code": code.value, "message": message}}


def domain_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        return Response(
            error_body(exc.code, exc.message),
            status=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST),
        )
    if isinstance(exc, DatabaseError):
        logger.exception("Store failure in %s", context.get("view").__class__.__name__)
        return Response(
            error_body(ErrorCode.UPSTREAM_FAILURE, "Storage is unavailable"),
            status=status.HTTP_502_BAD_GATEWAY,
        )
    return exception_handler(exc, context)
