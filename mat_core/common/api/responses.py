# mat_core/common/api/responses.py
from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.response import Response


def success(data: Any, *, message: str | None = None, http_status: int = status.HTTP_200_OK) -> Response:
    """
    Success envelope: {"data": ..., "message": ...}; message only when given.
    """
    body: dict[str, Any] = {"data": data}
    if message:
        body["message"] = message
    return Response(body, status=http_status)
