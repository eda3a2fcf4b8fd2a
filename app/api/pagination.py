from typing import Any, Callable, Dict, Iterable, Mapping, Optional


PAGINATION_KEYS = ("page", "pageSize", "per_page", "limit", "sortBy", "sortOrder")


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _resolve_sort(model, requested: Optional[str], default_sort: str, allowed: Optional[Iterable[str]]):
    """Return (name, column); unknown or disallowed names fall back to `default_sort`."""
    name = requested or default_sort
    if allowed is not None and name not in allowed:
        name = default_sort
    column = getattr(model, name, None)
    if column is None:
        name, column = default_sort, getattr(model, default_sort)
    return name, column


def paginate_query(
    query,
    model,
    request_args: Mapping[str, str],
    serialize: Optional[Callable[[Any], Dict]] = None,
    *,
    page_param: str = "page",
    page_size_param: str = "pageSize",
    legacy_page_size_param: str = "per_page",
    default_page: int = 1,
    default_page_size: int = 25,
    max_page_size: int = 100,
    default_sort: str = "created_at",
    allowed_sort_fields: Optional[Iterable[str]] = None,
):
    """
    Page, sort and serialize a SQLAlchemy query from request arguments.

    Reads `page`, `pageSize` (or the legacy name, `per_page` or `limit`),
    `sortBy` and `sortOrder` (default `desc`, newest first). Page size is
    clamped to `[1, max_page_size]`.

    Returns: {"meta": {...}, "data": [serialized items]}
    """
    request_args = request_args or {}

    page = max(_to_int(request_args.get(page_param), default_page), 1)
    page_size_raw = request_args.get(page_size_param)
    if page_size_raw is None:
        page_size_raw = request_args.get(legacy_page_size_param)
    page_size = min(max(_to_int(page_size_raw, default_page_size), 1), max_page_size)

    sort_by, sort_column = _resolve_sort(model, request_args.get("sortBy"), default_sort, allowed_sort_fields)
    ascending = str(request_args.get("sortOrder") or "desc").lower() == "asc"
    query = query.order_by(sort_column.asc() if ascending else sort_column.desc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()

    to_dict = serialize or (lambda item: item.to_dict())
    return {
        "meta": {
            "total": total,
            "page": page,
            "pageSize": page_size,
            "total_pages": (total + page_size - 1) // page_size,
            "sortBy": sort_by,
            "sortOrder": "asc" if ascending else "desc",
        },
        "data": [to_dict(item) for item in items],
    }


def has_pagination_args(request_args: Mapping[str, str], keys: Optional[Iterable[str]] = None) -> bool:
    """True when the request asks for a paginated listing."""
    if not request_args:
        return False
    return any(k in request_args for k in (keys if keys is not None else PAGINATION_KEYS))


__all__ = ["paginate_query", "has_pagination_args", "PAGINATION_KEYS"]
