"""Pydantic models for API payloads."""

from models.customer import (  # noqa: F401
    WRITABLE_FIELDS,
    Customer,
    CustomerInput,
    CustomerUpdateInput,
)
from models.response import ApiResponse, ErrorResponse, PaginatedResult  # noqa: F401
