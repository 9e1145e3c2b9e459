"""Lambda handlers for the customer API."""
