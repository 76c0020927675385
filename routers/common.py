from typing import Any, Optional, Type

from fastapi import HTTPException

from payloads import P, build_payload
from validators import get_pagination, is_valid_object_id


class ListQuery:
    """page/limit/sort query parameters, clamped to their bounds."""

    def __init__(self, page: Optional[str] = None, limit: Optional[str] = None, sort: Optional[str] = None):
        self.page, self.limit = get_pagination(page, limit)
        self.sort = sort


def check_object_id(value: Optional[str], label: str) -> str:
    if not is_valid_object_id(value):
        raise HTTPException(status_code=400, detail=f"Invalid {label} id")
    return value


def check_optional_object_id(value: Optional[str], label: str) -> Optional[str]:
    if value:
        check_object_id(value, label)
    return value or None


def parse_body(model: Type[P], body: Any, message: str) -> P:
    payload = build_payload(model, body)
    if payload is None:
        raise HTTPException(status_code=400, detail=message)
    return payload


def found(value: Optional[dict], message: str) -> dict:
    if value is None:
        raise HTTPException(status_code=404, detail=message)
    return value
