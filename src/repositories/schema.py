"""
Table definition for the customers store.

Used to bootstrap local and test databases; production schemas are managed
outside this service.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    func,
    text,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

customers = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("project_id", String(64), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("address", Text),
    Column("phone", String(32)),
    Column("aadhar", String(32), unique=True),
    Column("email", String(255), unique=True),
    Column("is_deleted", SmallInteger, nullable=False, server_default=text("0")),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    Column("updated_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    # Keeps SQLite from handing out the id of a hard-deleted row again.
    sqlite_autoincrement=True,
)


def create_schema(engine: Engine) -> None:
    """Create the customers table if it does not exist."""
    metadata.create_all(engine, checkfirst=True)
