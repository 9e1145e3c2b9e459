"""Common response wrappers."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Body returned for every 4xx/5xx response."""

    error: str


class PaginatedResult(BaseModel, Generic[T]):
    """One page of rows plus the total number of rows matching the filter."""

    data: List[T]
    count: int
