"""
Pagination used across the API.

Clients page with `?page=` and size pages with `?limit=` (capped at 100),
matching the query parameters the mobile and web clients already send.
"""
from rest_framework.pagination import PageNumberPagination


class DefaultPagination(PageNumberPagination):
    """Page number paginator with a client-controlled page size."""
    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 100


def limit_param(request, default: int = 10, ceiling: int = 100) -> int:
    """Read `?limit=` for unpaginated top-N endpoints, clamped to [1, ceiling]."""
    try:
        value = int(request.query_params.get("limit", default))
    except (TypeError, ValueError):
        return default
    return max(1, min(value, ceiling))
