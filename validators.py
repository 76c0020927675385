"""
Primitive validators and the shared pagination/sort normalizer.

Every function here is total: it returns a bool, a normalized value or None,
and never raises.
"""
import math
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Tuple

from bson.objectid import ObjectId
from pymongo import ASCENDING, DESCENDING

MIN_PAGE, MAX_PAGE, DEFAULT_PAGE = 1, 100000, 1
MIN_LIMIT, MAX_LIMIT, DEFAULT_LIMIT = 1, 100, 10

DEFAULT_SORT_FIELD = "createdAt"


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and ObjectId.is_valid(value)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def to_number(value: Any) -> Optional[float]:
    """Coerce numbers and numeric strings; anything non-finite becomes None."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return parsed if math.isfinite(parsed) else None


def to_positive_number(value: Any) -> Optional[float]:
    parsed = to_number(value)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def to_non_negative_number(value: Any) -> Optional[float]:
    parsed = to_number(value)
    if parsed is None or parsed < 0:
        return None
    return parsed


def to_rating(value: Any) -> Optional[float]:
    parsed = to_number(value)
    if parsed is None or parsed < 1 or parsed > 5:
        return None
    return parsed


def to_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime string. Naive values are taken as UTC."""
    if not is_non_empty_string(value):
        return None
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_pagination_number(value: Any, fallback: int, minimum: int, maximum: int) -> int:
    parsed = to_number(value) if value is not None and not isinstance(value, bool) else None
    if parsed is None:
        return fallback
    return max(minimum, min(maximum, math.trunc(parsed)))


def get_pagination(page: Any, limit: Any) -> Tuple[int, int]:
    return (
        parse_pagination_number(page, DEFAULT_PAGE, MIN_PAGE, MAX_PAGE),
        parse_pagination_number(limit, DEFAULT_LIMIT, MIN_LIMIT, MAX_LIMIT),
    )


def parse_sort(sort: Optional[str], allowed_fields: Iterable[str]) -> List[Tuple[str, int]]:
    """
    Turn "field:direction" into a pymongo sort spec.

    Unknown or missing fields fall back to newest first. "asc" (any case) sorts
    ascending, every other direction descending. _id is appended with the same
    direction so ties come back in a stable order.
    """
    if not sort:
        return [(DEFAULT_SORT_FIELD, DESCENDING), ("_id", DESCENDING)]
    parts = sort.split(":")
    field = parts[0]
    direction = parts[1] if len(parts) > 1 else "desc"
    if field not in set(allowed_fields):
        return [(DEFAULT_SORT_FIELD, DESCENDING), ("_id", DESCENDING)]
    order = ASCENDING if direction.lower() == "asc" else DESCENDING
    return [(field, order), ("_id", order)]


def build_pagination(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": max(1, math.ceil(total / limit)),
    }
