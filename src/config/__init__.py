"""Runtime configuration for the customer API Lambda."""
