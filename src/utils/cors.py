"""
CORS helpers.

Only origins on the configured allow-list get ``Access-Control-*`` headers;
anything else is returned untouched so the browser blocks it.
"""

from typing import Any, Dict

from config.settings import Settings
from utils.http import HttpRequest
from utils.responses import empty_response


def add_cors_headers(request: HttpRequest, response: Dict[str, Any], settings: Settings) -> Dict[str, Any]:
    """Add CORS headers to a response for simple and preflight requests."""
    origin = request.header("Origin")
    if not origin or origin not in settings.allowed_origins:
        return response

    headers = response.setdefault("headers", {})
    headers["Access-Control-Allow-Origin"] = origin
    headers["Vary"] = "Origin"

    if request.method == "OPTIONS":
        headers["Access-Control-Allow-Methods"] = settings.allowed_methods
        headers["Access-Control-Allow-Headers"] = settings.allowed_headers
        headers["Access-Control-Max-Age"] = str(settings.max_age_seconds)
        # Preflight must never surface a downstream error.
        if response.get("statusCode") in (404, 500):
            headers.pop("Content-Type", None)
            return empty_response(204, headers)

    return response


def preflight_response(request: HttpRequest, settings: Settings) -> Dict[str, Any]:
    """Answer an OPTIONS request with 204 No Content."""
    return add_cors_headers(request, empty_response(204), settings)
