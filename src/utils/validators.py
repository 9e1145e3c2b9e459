"""Validation helpers shared by the service layer."""

from typing import Any

from utils.error_handling import ValidationError

# Largest value a BIGINT / SQLite INTEGER key can hold.
MAX_ID = 2**63 - 1


def ensure_present(value: Any, field: str) -> None:
    """Raise ValidationError if value is missing or blank."""
    if value is None or (isinstance(value, str) and not value.strip()) or value == []:
        raise ValidationError(f"{field} is required")


def ensure_positive_id(value: Any, label: str = "customer ID") -> int:
    """Return value unchanged, or raise ValidationError unless it is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_ID:
        raise ValidationError(f"Invalid {label} provided.")
    return value
