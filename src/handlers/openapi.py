"""Serves the static OpenAPI document bundled next to this module."""

from functools import lru_cache
from pathlib import Path

from utils.responses import text_response

OPENAPI_PATH = "/openapi.yaml"
OPENAPI_FILE = Path(__file__).with_name("openapi.yaml")


@lru_cache(maxsize=1)
def load_document() -> str:
    return OPENAPI_FILE.read_text(encoding="utf-8")


def lambda_handler(event, context):
    """Handle GET /openapi.yaml."""
    return text_response(load_document(), "text/yaml")
