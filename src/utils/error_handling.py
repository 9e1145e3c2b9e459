"""Typed application errors and helpers for consistent error responses."""

from enum import Enum
from typing import Any, Dict, Optional

from models.response import ErrorResponse
from utils.responses import json_response


class ErrorKind(str, Enum):
    """Error categories understood by the HTTP boundary."""

    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class AppError(Exception):
    """Base class for application errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(AppError):
    """Raised when input validation fails."""

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class ConflictError(AppError):
    """Raised when a write collides with a unique column."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)


class StoreError(AppError):
    """
    Raised when the data store fails.

    The message is ``"<context>: <cause>"`` so that each layer can add its
    own context while keeping the inner message.
    """

    kind = ErrorKind.INTERNAL

    def __init__(self, context: str, cause: Optional[BaseException] = None):
        message = f"{context}: {cause}" if cause is not None else context
        super().__init__(message)
        self.context = context
        self.cause = cause


def to_response(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    return json_response(ErrorResponse(error=error.message), error.status_code)
