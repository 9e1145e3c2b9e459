"""Customer models."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Columns a client may write. id, is_deleted and the timestamps are store-managed.
WRITABLE_FIELDS = ("project_id", "name", "address", "phone", "aadhar", "email")


def _require_text(value: Optional[str]) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError("must be a non-empty string")
    return cleaned


class Customer(BaseModel):
    """A persisted customer row."""

    id: int
    project_id: str
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    aadhar: Optional[str] = None
    email: Optional[str] = None
    is_deleted: int = 0
    created_at: datetime
    updated_at: datetime


class CustomerInput(BaseModel):
    """Payload for creating a customer."""

    model_config = ConfigDict(extra="ignore")

    project_id: str
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    aadhar: Optional[str] = None
    email: Optional[str] = None

    @field_validator("project_id", "name")
    @classmethod
    def validate_required(cls, value: str) -> str:
        """Reject blank identifiers before they reach the database."""
        return _require_text(value)


class CustomerUpdateInput(BaseModel):
    """
    Partial update payload.

    Every field is optional. Only the fields the client actually sent are
    written, so ``{"address": null}`` clears the address while omitting
    ``address`` leaves it alone. Keys outside WRITABLE_FIELDS are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    project_id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    aadhar: Optional[str] = None
    email: Optional[str] = None

    @field_validator("project_id", "name")
    @classmethod
    def validate_not_blank(cls, value: Optional[str]) -> str:
        return _require_text(value)

    def provided_fields(self) -> Dict[str, Any]:
        """Return the allow-listed fields that were explicitly supplied."""
        return {
            name: getattr(self, name)
            for name in WRITABLE_FIELDS
            if name in self.model_fields_set
        }

    def is_empty(self) -> bool:
        return not self.provided_fields()
