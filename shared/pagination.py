"""Page-number pagination rendered in the list envelope used by every endpoint."""

from __future__ import annotations

import math

from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.response import Response  # type: ignore


class EnvelopePagination(PageNumberPagination):
    """
    ``?page=2&limit=20`` pagination.

    Responds with ``{success, count, total, pagination, data}`` where
    ``count`` is the size of the current page and ``total`` the size of the
    whole result set.
    """

    page_query_param = "page"
    page_size_query_param = "limit"
    max_page_size = 100

    def get_pagination_meta(self) -> dict:
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        current = self.page.number
        pages = math.ceil(total / limit) if limit else 0
        return {
            "current": current,
            "pages": pages,
            "hasNext": current < pages,
            "hasPrev": current > 1,
        }

    def get_paginated_response(self, data):  # type: ignore
        return Response(
            {
                "success": True,
                "count": len(data),
                "total": self.page.paginator.count,
                "pagination": self.get_pagination_meta(),
                "data": data,
            }
        )

    def get_paginated_response_schema(self, schema):  # type: ignore
        return {
            "type": "object",
            "properties": {
                "success": {"type": "boolean"},
                "count": {"type": "integer"},
                "total": {"type": "integer"},
                "pagination": {
                    "type": "object",
                    "properties": {
                        "current": {"type": "integer"},
                        "pages": {"type": "integer"},
                        "hasNext": {"type": "boolean"},
                        "hasPrev": {"type": "boolean"},
                    },
                },
                "data": schema,
            },
        }
