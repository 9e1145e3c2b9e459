"""
Single entrypoint Lambda for the customer API.

OPTIONS requests are answered before routing; every other response passes
through ``add_cors_headers`` on the way out.
"""

from typing import Any, Dict, Optional

from config.settings import Settings
from utils.cors import add_cors_headers, preflight_response
from utils.error_handling import AppError, to_response
from utils.http import HttpRequest
from utils.logging_config import get_logger
from utils.responses import json_response

from . import customers, health_check, openapi

logger = get_logger(__name__)

# Built once per warm container.
_settings: Optional[Settings] = None
_customer_service = None


def _get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_environment()
    return _settings


def _get_customer_service():
    """Lazy-load CustomerService so cold starts without DB traffic stay cheap."""
    global _customer_service
    if _customer_service is None:
        from repositories.customer_queries import CustomerQueries
        from repositories.database import get_db_engine
        from repositories.sql_repo import SqlRepository
        from services.customer_service import CustomerService

        engine = get_db_engine(_get_settings())
        _customer_service = CustomerService(CustomerQueries(SqlRepository(engine)))
    return _customer_service


def _not_found() -> Dict[str, Any]:
    return json_response({"error": "Not Found"}, 404)


def _dispatch(event, context, request: HttpRequest, settings: Settings) -> Dict[str, Any]:
    if request.path == openapi.OPENAPI_PATH and request.method == "GET":
        return openapi.lambda_handler(event, context)

    if request.path == health_check.HEALTH_PATH and request.method == "GET":
        return health_check.lambda_handler(event, context, settings)

    if request.path.startswith(f"{settings.base_path}/customers"):
        response = customers.route(request, _get_customer_service(), settings)
        return response or _not_found()

    return _not_found()


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    Routes by path prefix and applies CORS headers to the result, including
    error responses.
    """
    settings = _get_settings()
    try:
        request = HttpRequest.from_event(event)
    except Exception:
        logger.exception("Unreadable event")
        return json_response({"error": "An unexpected error occurred."}, 500)

    if request.method == "OPTIONS":
        return preflight_response(request, settings)

    try:
        response = _dispatch(event, context, request, settings)
    except AppError as exc:
        logger.error(
            "Request failed before routing",
            extra={"path": request.path, "kind": exc.kind.value, "error": exc.message},
        )
        response = to_response(exc)
    except Exception:
        logger.exception("Unhandled error", extra={"path": request.path})
        response = json_response({"error": "An unexpected error occurred."}, 500)

    return add_cors_headers(request, response, settings)
