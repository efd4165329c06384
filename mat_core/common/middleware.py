# mat_core/common/middleware.py
from __future__ import annotations

import logging

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from mat_core.common.api.exceptions import (
    INTERNAL_ERROR_MSG,
    REQUEST_ID_HEADER,
    build_error_envelope,
    ensure_request_id,
)

logger = logging.getLogger(__name__)


class RequestIdMiddleware(MiddlewareMixin):
    """
    Tags every request with a request id (echoed as X-Request-Id).

    DRF views already convert failures through the API exception handler; this catches
    whatever escapes a plain Django view under /api/ and returns the same error body.
    """

    API_PREFIX = "/api/"

    def process_request(self, request):
        incoming = request.META.get("HTTP_X_REQUEST_ID")
        if incoming:
            request.request_id = incoming[:64]
        ensure_request_id(request)

    def process_exception(self, request, exception):
        if not request.path.startswith(self.API_PREFIX):
            return None

        logger.exception(
            "Unhandled error (path=%s request_id=%s)",
            request.path,
            ensure_request_id(request),
        )
        return JsonResponse(build_error_envelope(message=INTERNAL_ERROR_MSG), status=500)

    def process_response(self, request, response):
        response[REQUEST_ID_HEADER] = ensure_request_id(request)
        return response
