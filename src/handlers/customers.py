"""
Router for /customers and /customers/{id}.

``route`` returns None when no customer route matches so that the main
entrypoint can answer with its own 404.
"""

import functools
import re
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from config.settings import Settings
from models.response import ApiResponse
from utils.error_handling import AppError, NotFoundError, ValidationError, to_response
from utils.http import HttpRequest
from utils.logging_config import get_logger
from utils.responses import json_response
from utils.validators import MAX_ID

if TYPE_CHECKING:
    from services.customer_service import CustomerService

logger = get_logger(__name__)

CUSTOMER_ID_PATTERN = re.compile(r"/customers/([^/]+)")
DIGITS = re.compile(r"[0-9]+")

Response = Dict[str, Any]


def handle_route_errors(fn: Callable[..., Response]) -> Callable[..., Response]:
    """Turn anything raised below the router into a JSON error response."""

    @functools.wraps(fn)
    def wrapper(request: HttpRequest, *args, **kwargs) -> Response:
        try:
            return fn(request, *args, **kwargs)
        except AppError as exc:
            log = logger.error if exc.status_code >= 500 else logger.warning
            log(
                "Customer route failed",
                extra={
                    "method": request.method,
                    "path": request.path,
                    "kind": exc.kind.value,
                    "error": exc.message,
                },
            )
            return to_response(exc)
        except Exception as exc:
            logger.exception(
                "Customer route crashed",
                extra={"method": request.method, "path": request.path},
            )
            return json_response({"error": str(exc) or "An unexpected error occurred."}, 500)

    return wrapper


def _parse_int(raw: Optional[str], name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be an integer.") from None
    if abs(value) > MAX_ID:
        raise ValidationError(f"Query parameter '{name}' is out of range.")
    return value


def _parse_customer_id(raw: str) -> int:
    if not DIGITS.fullmatch(raw):
        raise ValidationError("Invalid customer ID")
    return int(raw)


@handle_route_errors
def list_customers(request: HttpRequest, service: "CustomerService", settings: Settings) -> Response:
    """GET /customers?limit=&offset=&search="""
    limit = _parse_int(request.query.get("limit"), "limit", settings.default_limit)
    offset = _parse_int(request.query.get("offset"), "offset", 0)
    # Oversized pages are reduced, not rejected.
    limit = min(limit, settings.max_limit)
    search = request.query.get("search") or ""

    page = service.list_customers(limit, offset, search)
    return json_response(page)


@handle_route_errors
def create_customer(request: HttpRequest, service: "CustomerService", settings: Settings) -> Response:
    customer = service.create_customer(request.json())
    return json_response(customer, 201)


@handle_route_errors
def get_customer(request: HttpRequest, service: "CustomerService", settings: Settings, raw_id: str) -> Response:
    customer_id = _parse_customer_id(raw_id)
    customer = service.get_customer_details(customer_id)
    if not customer:
        raise NotFoundError("Customer not found or already deleted")
    return json_response(customer)


@handle_route_errors
def update_customer(request: HttpRequest, service: "CustomerService", settings: Settings, raw_id: str) -> Response:
    customer_id = _parse_customer_id(raw_id)
    customer = service.update_customer(customer_id, request.json())
    if not customer:
        raise NotFoundError("Customer not found or could not be updated")
    return json_response(customer)


@handle_route_errors
def delete_customer(request: HttpRequest, service: "CustomerService", settings: Settings, raw_id: str) -> Response:
    """DELETE /customers/{id}; ``?action=hard`` removes the row, anything else soft-deletes."""
    customer_id = _parse_customer_id(raw_id)
    if request.query.get("action") == "hard":
        mode = "hard"
        deleted = service.hard_delete_customer(customer_id)
    else:
        mode = "soft"
        deleted = service.soft_delete_customer(customer_id)

    if not deleted:
        raise NotFoundError(f"Customer not found or could not be {mode}-deleted")
    return json_response(ApiResponse(message=f"Customer with ID {customer_id} {mode}-deleted successfully."))


def route(request: HttpRequest, service: "CustomerService", settings: Settings) -> Optional[Response]:
    """Dispatch a request whose path starts with the API base path."""
    sub_path = request.path[len(settings.base_path):]
    method = request.method

    if sub_path == "/customers":
        if method == "GET":
            return list_customers(request, service, settings)
        if method == "POST":
            return create_customer(request, service, settings)
        return None

    match = CUSTOMER_ID_PATTERN.fullmatch(sub_path)
    if match:
        raw_id = match.group(1)
        if method == "GET":
            return get_customer(request, service, settings, raw_id)
        if method == "PATCH":
            return update_customer(request, service, settings, raw_id)
        if method == "DELETE":
            return delete_customer(request, service, settings, raw_id)

    return None
