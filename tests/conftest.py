"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import main` to work when running
tests, simulating the Lambda environment where code is deployed from the
src/ directory.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where the contents of src/ are the root of the deployment package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Offline-friendly defaults so nothing reaches AWS or a real database.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("ENVIRONMENT", "dev")
os.environ.setdefault("CORS_ALLOWED_ORIGINS", "http://localhost:5173,https://app.example.com")

ALLOWED_ORIGIN = "http://localhost:5173"


@pytest.fixture
def settings():
    from config.settings import Settings

    return Settings(allowed_origins=(ALLOWED_ORIGIN, "https://app.example.com"))


@pytest.fixture
def engine():
    """In-memory SQLite built through the production engine factory."""
    from repositories.database import create_db_engine
    from repositories.schema import create_schema

    db_engine = create_db_engine("sqlite://")
    create_schema(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def queries(engine):
    from repositories.customer_queries import CustomerQueries
    from repositories.sql_repo import SqlRepository

    return CustomerQueries(SqlRepository(engine))


@pytest.fixture
def service(queries):
    from services.customer_service import CustomerService

    return CustomerService(queries)


@pytest.fixture
def make_event():
    """Build an API Gateway HTTP API (payload 2.0) event."""

    def _make(method, path, query=None, body=None, headers=None):
        return {
            "version": "2.0",
            "rawPath": path,
            "requestContext": {"http": {"method": method, "path": path}},
            "queryStringParameters": query,
            "headers": headers or {},
            "body": body,
            "isBase64Encoded": False,
        }

    return _make
