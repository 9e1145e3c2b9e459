"""Response builders for API Gateway HTTP API (payload format 2.0)."""

import json
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel


def json_response(
    data: Any, status: int = 200, headers: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    if isinstance(data, BaseModel):
        body = data.model_dump_json()
    else:
        body = json.dumps(data, default=str)
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json", **(headers or {})},
        "body": body,
    }


def text_response(text: str, content_type: str, status: int = 200) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": content_type},
        "body": text,
    }


def empty_response(status: int = 204, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Response without a body (preflight)."""
    return {"statusCode": status, "headers": dict(headers or {}), "body": ""}
