"""
Domain errors and the mapping from errors to the response envelope.
"""
from contextlib import contextmanager
from typing import Any, Dict, Optional

from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError


class ServiceError(Exception):
    """Business-rule failure carrying the HTTP status it should surface as."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class AuthenticationError(ServiceError):
    status_code = 401


@contextmanager
def conflict_on_duplicate(message: str):
    """Turn a unique-index violation raised inside the block into a 409."""
    try:
        yield
    except DuplicateKeyError as exc:
        raise ConflictError(message) from exc


def envelope(message: str, result: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"message": message, "result": result if result is not None else {}}


def describe_validation_error(exc: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '__root__'}: {err['msg']}" for err in exc.errors()
    )
    return f"{exc.title} validation failed: {details}"
