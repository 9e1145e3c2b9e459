"""Thin SQL wrapper over a SQLAlchemy Core engine."""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine


class SqlRepository:
    """Thin wrapper to keep SQL organized and parameterized."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def fetch_one(self, query: str, params: Dict[str, Any]) -> Optional[dict]:
        """Execute a SELECT and return one row as dict."""
        stmt = text(query)
        with self.engine.connect() as conn:
            row = conn.execute(stmt, params).fetchone()
            return dict(row._mapping) if row else None

    def fetch_all(self, query: str, params: Dict[str, Any]) -> List[dict]:
        """Execute a SELECT and return every row as dict."""
        stmt = text(query)
        with self.engine.connect() as conn:
            return [dict(row._mapping) for row in conn.execute(stmt, params)]

    def scalar(self, query: str, params: Dict[str, Any]) -> Any:
        """Execute a SELECT and return the first column of the first row."""
        stmt = text(query)
        with self.engine.connect() as conn:
            return conn.execute(stmt, params).scalar()

    def execute(self, query: str, params: Dict[str, Any]) -> int:
        """Execute a parameterized write and return the affected row count."""
        stmt = text(query)
        with self.engine.begin() as conn:
            return conn.execute(stmt, params).rowcount

    def execute_returning(self, query: str, params: Dict[str, Any]) -> Any:
        """Execute a write with a RETURNING clause and return its single value."""
        stmt = text(query)
        with self.engine.begin() as conn:
            return conn.execute(stmt, params).scalar_one()
