from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ApiError(Exception):
    """Raise to return a consistent JSON error response."""

    status_code: int
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self, request_id: str | None = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details or {},
                "request_id": request_id,
            }
        }
        return payload


class ValidationFailed(ApiError):
    """Missing or malformed input (400)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(400, "validation_error", message, details)


class Unauthorized(ApiError):
    """No valid session, or bad credentials (401)."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(401, "unauthorized", message)


class Conflict(ApiError):
    """A unique field is already taken (409). Never says which one."""

    def __init__(self, message: str):
        super().__init__(409, "conflict", message)


class StoreFailure(ApiError):
    """The database rejected or failed a statement (500).

    The message is generic; the underlying error is logged where it is caught.
    """

    def __init__(self, message: str):
        super().__init__(500, "store_failure", message)

