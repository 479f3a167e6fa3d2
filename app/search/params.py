"""
Purpose:
- Map the typed sort/order/page/per_page request fields onto GitHub's
  string query parameters.
- Validate every value against GitHub's documented limits before anything is sent.

Rules:
- "unspecified" enums and 0/None numbers are omitted, never errors.
- The first invalid field raises InvalidArgument naming the field.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Optional, Type

from ..core.errors import InvalidArgument
from .schema import OrderOption, SortOption

# Closed tables: tagged value -> GitHub token. Adding a value is one line here.
SORT_TOKENS: Dict[SortOption, str] = {
    SortOption.INDEXED: "indexed",
}
ORDER_TOKENS: Dict[OrderOption, str] = {
    OrderOption.ASC: "asc",
    OrderOption.DESC: "desc",
}

PER_PAGE_MIN, PER_PAGE_MAX = 1, 100
PAGE_MIN = 1

# Only these keys may ever reach the outbound query string.
ALLOWED_KEYS = frozenset({"sort", "order", "per_page", "page"})


def _enum_token(field: str, value: Any, options: Type[Enum], tokens: Dict[Any, str], allowed: str) -> Optional[str]:
    if value is None:
        return None
    try:
        option = options(value)
    except (ValueError, TypeError):
        raise InvalidArgument(field, allowed) from None
    if option.value == "unspecified":
        return None
    token = tokens.get(option)
    if token is None:
        raise InvalidArgument(field, allowed)
    return token


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass; True must not pass as page 1
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def map_sort(value: Any) -> Optional[str]:
    return _enum_token("sort", value, SortOption, SORT_TOKENS,
                       "allowed value: 'indexed'")


def map_order(value: Any) -> Optional[str]:
    return _enum_token("order", value, OrderOption, ORDER_TOKENS,
                       "allowed values: 'asc', 'desc'")


def map_per_page(value: Any) -> Optional[str]:
    if value is None or (value == 0 and not isinstance(value, bool)):
        return None
    n = _as_int(value)
    if n is None or not PER_PAGE_MIN <= n <= PER_PAGE_MAX:
        raise InvalidArgument("per_page", f"must be an integer between {PER_PAGE_MIN} and {PER_PAGE_MAX}")
    return str(n)


def map_page(value: Any) -> Optional[str]:
    if value is None or (value == 0 and not isinstance(value, bool)):
        return None
    n = _as_int(value)
    if n is None or n < PAGE_MIN:
        raise InvalidArgument("page", f"must be an integer greater than or equal to {PAGE_MIN}")
    return str(n)


def build_query_params(
    sort: Any = SortOption.UNSPECIFIED,
    order: Any = OrderOption.UNSPECIFIED,
    page: Any = None,
    per_page: Any = None,
) -> Dict[str, str]:
    """
    Return the GitHub query parameters for one request.
    Raises InvalidArgument on the first field that violates GitHub's constraints.
    """
    mapped = {
        "sort": map_sort(sort),
        "order": map_order(order),
        "per_page": map_per_page(per_page),
        "page": map_page(page),
    }
    return {k: v for k, v in mapped.items() if v is not None}
