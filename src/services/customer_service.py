"""
Customer Service.

Business rules for customer records on top of CustomerQueries. Input is
validated before the store is touched; store failures are re-raised with
context describing the operation that failed.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from models.customer import Customer, CustomerInput, CustomerUpdateInput
from models.response import PaginatedResult
from repositories.customer_queries import CustomerQueries
from utils.error_handling import StoreError, ValidationError
from utils.logging_config import get_logger
from utils.validators import ensure_positive_id, ensure_present

logger = get_logger(__name__)


def _describe(exc: PydanticValidationError) -> str:
    """Collapse pydantic errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "body"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class CustomerService:
    """Service for customer CRUD."""

    def __init__(self, queries: CustomerQueries):
        self.queries = queries

    def create_customer(self, payload: Union[CustomerInput, Mapping[str, Any]]) -> Customer:
        """Validate and insert a new customer."""
        if not isinstance(payload, CustomerInput):
            if not isinstance(payload, Mapping):
                raise ValidationError("Customer payload must be a JSON object.")
            ensure_present(payload.get("project_id"), "project_id")
            ensure_present(payload.get("name"), "name")
            try:
                payload = CustomerInput.model_validate(payload)
            except PydanticValidationError as exc:
                raise ValidationError(_describe(exc)) from exc

        try:
            customer = self.queries.insert(payload)
        except StoreError as exc:
            raise StoreError("Failed to create customer", exc) from exc

        logger.info("Customer created", extra={"customer_id": customer.id})
        return customer

    def get_customer_details(self, customer_id: int) -> Optional[Customer]:
        """Return a live customer, or None when missing or soft-deleted."""
        ensure_positive_id(customer_id)
        try:
            return self.queries.fetch_by_id(customer_id)
        except StoreError as exc:
            raise StoreError(f"Failed to retrieve customer details for ID {customer_id}", exc) from exc

    def list_customers(self, limit: int, offset: int, search: str = "") -> PaginatedResult[Customer]:
        if limit < 1 or offset < 0:
            raise ValidationError("Invalid limit or offset parameters.")
        try:
            rows, total = self.queries.fetch_list(limit, offset, search or "")
        except StoreError as exc:
            raise StoreError("Failed to list customers", exc) from exc
        return PaginatedResult[Customer](data=rows, count=total)

    def update_customer(
        self, customer_id: int, payload: Union[CustomerUpdateInput, Mapping[str, Any]]
    ) -> Optional[Customer]:
        """
        Apply a partial update and return the fresh row.

        An update with no writable fields is not an error: the current record
        is returned unchanged and nothing is written. Returns None when the
        customer does not exist or is soft-deleted.
        """
        ensure_positive_id(customer_id)
        if not isinstance(payload, CustomerUpdateInput):
            if not isinstance(payload, Mapping):
                raise ValidationError("Update payload must be a JSON object.")
            try:
                payload = CustomerUpdateInput.model_validate(payload)
            except PydanticValidationError as exc:
                raise ValidationError(_describe(exc)) from exc

        if payload.is_empty():
            return self.get_customer_details(customer_id)

        try:
            updated = self.queries.update(customer_id, payload.provided_fields())
        except StoreError as exc:
            raise StoreError(f"Failed to update customer with ID {customer_id}", exc) from exc

        if not updated:
            return None
        logger.info(
            "Customer updated",
            extra={"customer_id": customer_id, "fields": sorted(payload.provided_fields())},
        )
        return self.get_customer_details(customer_id)

    def soft_delete_customer(self, customer_id: int) -> bool:
        ensure_positive_id(customer_id)
        try:
            deleted = self.queries.soft_delete(customer_id)
        except StoreError as exc:
            raise StoreError(f"Failed to soft delete customer with ID {customer_id}", exc) from exc
        if deleted:
            logger.info("Customer soft-deleted", extra={"customer_id": customer_id})
        return deleted

    def hard_delete_customer(self, customer_id: int) -> bool:
        ensure_positive_id(customer_id)
        try:
            deleted = self.queries.hard_delete(customer_id)
        except StoreError as exc:
            raise StoreError(f"Failed to hard delete customer with ID {customer_id}", exc) from exc
        if deleted:
            logger.info("Customer hard-deleted", extra={"customer_id": customer_id})
        return deleted
