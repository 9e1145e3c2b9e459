"""Shared helpers: errors, logging, HTTP request/response and CORS."""
