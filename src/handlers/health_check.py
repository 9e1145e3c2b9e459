"""Lightweight health check handler."""

from datetime import datetime, timezone
from typing import Optional

from config.settings import Settings
from utils.responses import json_response

HEALTH_PATH = "/health"


def lambda_handler(event, context, settings: Optional[Settings] = None):
    """Return a simple 200 response to verify the function is alive."""
    settings = settings or Settings.from_environment()
    return json_response(
        {
            "status": "ok",
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )
