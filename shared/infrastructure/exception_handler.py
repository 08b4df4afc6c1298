"""
DRF exception handler

Renders every API error as ``{"error": "<message>"}`` with the status code of
the error taxonomy. Validation errors additionally carry ``details``.
Unexpected database failures are logged with their traceback and answered
with a generic storage error.
"""

from __future__ import annotations

import structlog
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied  # type: ignore
from django.db import DatabaseError  # type: ignore
from django.http import Http404  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import DomainError, StorageError

logger = structlog.get_logger(__name__)


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    return str(detail)


def api_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, DomainError):
        if isinstance(exc, StorageError):
            logger.error("api.storage_error", view=view_name, error=exc.message)
            return Response({"error": StorageError.default_message}, status=exc.status_code)
        return Response({"error": exc.message}, status=exc.status_code)

    if isinstance(exc, DatabaseError):
        logger.error("api.database_error", view=view_name, exc_info=exc)
        return Response(
            {"error": StorageError.default_message},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {"error": _first_message(exc.detail), "details": exc.detail}
    elif isinstance(exc, (Http404, DjangoPermissionDenied)):
        response.data = {"error": _first_message(response.data)}
    elif isinstance(exc, exceptions.APIException):
        response.data = {"error": _first_message(exc.detail)}
    return response
