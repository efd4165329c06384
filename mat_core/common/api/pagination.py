# mat_core/common/api/pagination.py
from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from rest_framework.pagination import BasePagination
from rest_framework.response import Response


def _positive_int(raw, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(query_params, *, default_limit: int | None = None, max_limit: int | None = None) -> PageParams:
    """
    page/limit from the query string. Missing, non-numeric or non-positive values fall back
    to the defaults; limit is clamped to max_limit.
    """
    default_limit = default_limit or settings.PAGINATION_DEFAULT_LIMIT
    max_limit = max_limit or settings.PAGINATION_MAX_LIMIT

    page = _positive_int(query_params.get("page"), 1)
    limit = min(_positive_int(query_params.get("limit"), default_limit), max_limit)
    return PageParams(page=page, limit=limit)


class LimitPagePagination(BasePagination):
    """
    {data, page, limit, total}. A page past the end yields an empty list, never 404.
    """
    default_limit: int | None = None
    max_limit: int | None = None

    def paginate_queryset(self, queryset, request, view=None):
        self.params = page_params(
            request.query_params,
            default_limit=self.default_limit,
            max_limit=self.max_limit,
        )
        # Sequential on the request's connection; both reads see the same filtered queryset.
        self.total = queryset.count()
        start = self.params.offset
        return list(queryset[start:start + self.params.limit])

    def get_paginated_response(self, data):
        return Response(
            {
                "data": data,
                "page": self.params.page,
                "limit": self.params.limit,
                "total": self.total,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["data", "page", "limit", "total"],
            "properties": {
                "data": schema,
                "page": {"type": "integer", "example": 1},
                "limit": {"type": "integer", "example": 20},
                "total": {"type": "integer", "example": 57},
            },
        }


def paginate(
    request,
    queryset,
    serializer_class,
    *,
    default_limit: int | None = None,
    context: dict | None = None,
) -> Response:
    """
    Shared pagination helper to enforce a stable contract:
      { data, page, limit, total }
    """
    p = LimitPagePagination()
    p.default_limit = default_limit
    page = p.paginate_queryset(queryset, request)
    ser = serializer_class(page, many=True, context=context or {"request": request})
    return p.get_paginated_response(ser.data)
