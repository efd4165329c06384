# mat_core/common/api/exceptions.py

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
INTERNAL_ERROR_MSG = "Error interno del servidor"


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware and DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, message: str, details: Any = None) -> dict[str, Any]:
    """
    Error body shared by DRF responses, middleware JsonResponses and the auth gate:
      {"error": "<message>"} plus "details" when there is structured output.
    """
    body: dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return body


def error_response(request, message: str, http_status: int, *, details: Any = None) -> Response:
    return Response(
        build_error_envelope(message=message, details=details),
        status=http_status,
        headers={REQUEST_ID_HEADER: ensure_request_id(request)},
    )


class AuthenticationError(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "No autenticado"
    default_code = "not_authenticated"


class AuthorizationError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "No tiene permisos para realizar esta acción"
    default_code = "permission_denied"


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Registro no encontrado"
    default_code = "not_found"


class DomainValidationError(APIException):
    """
    400 carrying a plain message (and optional structured details),
    unlike DRF's ValidationError which always nests field errors.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Datos inválidos"
    default_code = "validation_error"

    def __init__(self, detail=None, code=None, details: Any = None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)
        self.details = details


class ConflictError(APIException):
    """
    409 Conflict that still flows through the global exception handler.
    Use when a uniqueness or dependency rule blocks an action (duplicate RUT, record still referenced).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Ya existe un registro con esos datos"
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


def django_validation_message(exc: DjangoValidationError) -> str:
    if hasattr(exc, "message_dict"):
        for messages in exc.message_dict.values():
            if messages:
                return str(messages[0])
    if getattr(exc, "messages", None):
        return str(exc.messages[0])
    return str(exc)


def _first_message(data: Any) -> str | None:
    if isinstance(data, str):
        return data
    if isinstance(data, list):
        for item in data:
            found = _first_message(item)
            if found:
                return found
        return None
    if isinstance(data, dict):
        for key, value in data.items():
            found = _first_message(value)
            if found:
                if key in ("detail", "non_field_errors"):
                    return found
                return f"{key}: {found}"
    return None


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")

    if isinstance(exc, DjangoValidationError):
        exc = DomainValidationError(detail=django_validation_message(exc))
    elif isinstance(exc, ObjectDoesNotExist):
        exc = NotFoundError()

    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s (path=%s request_id=%s)",
            view.__class__.__name__ if view is not None else "view",
            getattr(request, "path", "?"),
            ensure_request_id(request),
        )
        return error_response(request, INTERNAL_ERROR_MSG, status.HTTP_500_INTERNAL_SERVER_ERROR)

    data = response.data
    details = None

    if isinstance(exc, DomainValidationError):
        message = str(exc.detail)
        details = exc.details
    elif isinstance(exc, Http404):
        message = NotFoundError.default_detail
    elif isinstance(exc, ValidationError):
        message = _first_message(data) or DomainValidationError.default_detail
        details = data if not (isinstance(data, dict) and set(data) <= {"detail"}) else None
    elif isinstance(data, dict) and "detail" in data:
        message = str(data.get("detail"))
        rest = {k: v for k, v in data.items() if k != "detail"}
        details = rest or None
    else:
        message = _first_message(data) or "Error"

    headers = {k: v for k, v in response.headers.items() if k.lower() != "content-type"}
    headers[REQUEST_ID_HEADER] = ensure_request_id(request)

    return Response(
        build_error_envelope(message=message, details=details),
        status=response.status_code,
        headers=headers,
    )
