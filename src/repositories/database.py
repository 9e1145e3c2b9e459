"""
Database engine construction.

The engine is created lazily and reused across warm Lambda invocations.
PostgreSQL (psycopg2) is the deployed store; SQLite URLs are accepted for
local development and tests.
"""

from __future__ import annotations

import json
from typing import Optional

import boto3
from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.pool import QueuePool, StaticPool

from config.settings import Settings
from utils.error_handling import StoreError
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Connection pooling for Lambda reuse.
_engine: Optional[Engine] = None


def get_db_engine(settings: Settings) -> Engine:
    """Get or create the shared SQLAlchemy engine."""
    global _engine
    if _engine is None:
        db_url = settings.database_url
        if not db_url and settings.db_secret_arn:
            db_url = _secret_to_db_url(settings.db_secret_arn)
        if not db_url:
            raise StoreError("Database is not configured (set DATABASE_URL or DB_SECRET_ARN)")
        _engine = create_db_engine(db_url)
    return _engine


def reset_engine() -> None:
    """Dispose of the shared engine (used by tests and on configuration changes)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


def create_db_engine(db_url: str) -> Engine:
    """Build an engine with settings appropriate for the URL's backend."""
    if db_url.startswith("sqlite"):
        engine = create_engine(
            db_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", _enable_case_sensitive_like)
        return engine

    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+psycopg2://", 1)

    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=1,
        max_overflow=2,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def _enable_case_sensitive_like(dbapi_connection, connection_record) -> None:
    """SQLite LIKE is case-insensitive by default; PostgreSQL's is not."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.close()


def _secret_to_db_url(secret_arn: str) -> str:
    """Build a SQLAlchemy URL from an RDS secret."""
    try:
        sm = boto3.client("secretsmanager")
        secret = json.loads(sm.get_secret_value(SecretId=secret_arn)["SecretString"])
    except Exception as exc:
        logger.error("Failed to load DB secret", extra={"error": str(exc)})
        raise StoreError("Failed to load database credentials", exc) from exc

    host = secret.get("host")
    port = secret.get("port", 5432)
    username = secret.get("username")
    password = secret.get("password")
    dbname = secret.get("dbname", "postgres")
    if not (host and username and password):
        raise StoreError("Database secret is missing host, username or password")
    url = URL.create(
        "postgresql+psycopg2",
        username=username,
        password=password,
        host=host,
        port=int(port),
        database=dbname,
    )
    return url.render_as_string(hide_password=False)
