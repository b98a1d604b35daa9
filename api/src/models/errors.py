"""
Application error taxonomy and the uniform error envelope.

Every failed request is answered with an ``ErrorResponse``. Handlers signal
expected failures by raising ``AppError`` with an ``ErrorKind``; the kind
alone decides the HTTP status.
"""

from datetime import datetime, timezone
from enum import Enum
from http import HTTPStatus
from typing import Optional

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Categories of request failure."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return int(_KIND_STATUS[self])


_KIND_STATUS = {
    ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.CONFLICT: HTTPStatus.CONFLICT,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """Expected application failure, translated to an error envelope."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value!r}, message={self.message!r})"


class ErrorResponse(BaseModel):
    """Error envelope returned for any failed request."""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="HTTP reason phrase")
    message: Optional[str] = Field(None, description="Failure detail")
    path: Optional[str] = Field(None, description="Request path")

    model_config = {
        "json_schema_extra": {
            "example": {
                "timestamp": "2024-01-01T12:00:00Z",
                "status": 404,
                "error": "Not Found",
                "message": "No endpoint GET /non-existent-endpoint.",
                "path": "/non-existent-endpoint"
            }
        }
    }

    @classmethod
    def for_status(
        cls,
        status_code: int,
        message: Optional[str] = None,
        path: Optional[str] = None
    ) -> "ErrorResponse":
        """Build an envelope, filling the reason phrase from the status code."""
        try:
            reason = HTTPStatus(status_code).phrase
        except ValueError:
            reason = "Unknown Status"
        return cls(status=status_code, error=reason, message=message, path=path)
