"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DomainException,
    MalformedDocument,
    RegistrationTransportFailure,
    ValidationFailure,
)

logger = logging.getLogger(__name__)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    if isinstance(exc, DomainException):
        return _handle_domain_exception(exc)

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response is not None:
            code = exc.default_code.upper().replace("-", "_")
            message = (
                response.data.get("detail", exc.default_detail)
                if isinstance(response.data, dict)
                else exc.default_detail
            )
            response.data = {"error": {"code": code, "message": message}}
            return response

    if isinstance(exc, Http404):
        return Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )

    return _handle_unexpected_exception(exc)


def _handle_domain_exception(exc: DomainException) -> Response:
    """Handle domain-specific exceptions."""
    if isinstance(exc, (ValidationFailure, MalformedDocument)):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, RegistrationTransportFailure):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.warning("Domain exception: %s - %s", exc.code, exc.message)
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_unexpected_exception(exc: Exception) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, exc_info=True)
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
