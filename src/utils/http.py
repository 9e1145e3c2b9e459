"""Normalize API Gateway HTTP API events into a small request object."""

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from utils.error_handling import ValidationError


@dataclass
class HttpRequest:
    """The parts of an inbound request the handlers care about."""

    method: str
    path: str
    query: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    base64_encoded: bool = False

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "HttpRequest":
        """
        Build a request from a payload 2.0 event (1.0 keys are accepted as a fallback).

        The body is kept as delivered. Base64 payloads are decoded lazily by
        ``json()`` so a bad body surfaces as a 400 from the route.
        """
        http = event.get("requestContext", {}).get("http", {})
        method = http.get("method") or event.get("httpMethod") or ""
        path = http.get("path") or event.get("rawPath") or event.get("path") or "/"

        headers = {
            str(name).lower(): value
            for name, value in (event.get("headers") or {}).items()
        }

        return cls(
            method=method.upper(),
            path=path,
            query=dict(event.get("queryStringParameters") or {}),
            headers=headers,
            body=event.get("body"),
            base64_encoded=bool(event.get("isBase64Encoded")),
        )

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())

    def text(self) -> Optional[str]:
        """Body as UTF-8 text, decoding base64 payloads."""
        if not self.body or not self.base64_encoded:
            return self.body
        try:
            return base64.b64decode(self.body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValidationError("Request body must be valid JSON") from exc

    def json(self) -> Any:
        """Parse the body as JSON; malformed input is the caller's fault."""
        text = self.text()
        try:
            return json.loads(text or "")
        except (TypeError, ValueError) as exc:
            raise ValidationError("Request body must be valid JSON") from exc
