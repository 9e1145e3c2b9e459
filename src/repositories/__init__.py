"""Data access for the customers store."""
