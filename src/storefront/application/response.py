"""Response envelope handed to outer layers.

Every operation maps to one envelope: ``success``, ``message`` and a
``data`` payload on success, or ``message``, ``error`` and a ``category``
on failure.  Each category carries the status code an HTTP layer would use.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InvalidStateError,
    UnauthenticatedError,
    ValidationError,
)


class ErrorCategory(Enum):
    UNAUTHENTICATED = ("unauthenticated", 401)
    NOT_FOUND = ("not_found", 404)
    INVALID_ARGUMENT = ("invalid_argument", 400)
    INVALID_STATE = ("invalid_state", 400)
    CONFLICT = ("conflict", 409)
    INTERNAL = ("internal", 500)

    def __init__(self, label: str, status_code: int) -> None:
        self.label = label
        self.status_code = status_code


_CATEGORIES: list[tuple[type[Exception], ErrorCategory]] = [
    (UnauthenticatedError, ErrorCategory.UNAUTHENTICATED),
    (EntityNotFoundError, ErrorCategory.NOT_FOUND),
    (ValidationError, ErrorCategory.INVALID_ARGUMENT),
    (InvalidStateError, ErrorCategory.INVALID_STATE),
    (ConflictError, ErrorCategory.CONFLICT),
]


def categorize(exc: Exception) -> ErrorCategory:
    for exc_type, category in _CATEGORIES:
        if isinstance(exc, exc_type):
            return category
    return ErrorCategory.INTERNAL


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class Response:

    success: bool
    message: str
    data: Any = None
    error: str | None = None
    category: ErrorCategory | None = None

    @property
    def status_code(self) -> int:
        return 200 if self.category is None else self.category.status_code

    @staticmethod
    def ok(message: str, data: Any = None) -> Response:
        return Response(success=True, message=message, data=_plain(data))

    @staticmethod
    def fail(exc: Exception, message: str | None = None) -> Response:
        category = categorize(exc)
        if message is None:
            # Unclassified failures get a generic message; the detail goes in ``error``.
            message = str(exc) if category is not ErrorCategory.INTERNAL else "Internal error"
        return Response(
            success=False,
            message=message,
            error=str(exc) or type(exc).__name__,
            category=category,
        )

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            body: dict[str, Any] = {"success": True, "message": self.message}
            if self.data is not None:
                body["data"] = self.data
            return body
        return {
            "success": False,
            "message": self.message,
            "error": self.error,
            "category": self.category.label if self.category else None,
        }
