"""
Environment-specific configuration settings.

Loaded once per warm Lambda container and passed explicitly to the router
and CORS helpers.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import os


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings with local-development defaults."""

    # Environment
    environment: str = "dev"
    base_path: str = "/api"

    # CORS
    allowed_origins: Tuple[str, ...] = ("http://localhost:5173",)
    allowed_methods: str = "GET,POST,PATCH,DELETE,OPTIONS"
    allowed_headers: str = "Content-Type,Authorization"
    max_age_seconds: int = 86400  # 24 hours

    # Pagination
    default_limit: int = 10
    max_limit: int = 50

    # Database
    database_url: Optional[str] = None
    db_secret_arn: Optional[str] = None

    def __post_init__(self) -> None:
        if self.default_limit < 1:
            raise ValueError("default_limit must be at least 1")
        if self.max_limit < self.default_limit:
            raise ValueError("max_limit must be greater than or equal to default_limit")
        if self.max_age_seconds < 0:
            raise ValueError("max_age_seconds must not be negative")

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ
        defaults = cls()

        origins = env.get("CORS_ALLOWED_ORIGINS")
        base_path = env.get("API_BASE_PATH", defaults.base_path).rstrip("/")

        return cls(
            environment=env.get("ENVIRONMENT", defaults.environment),
            base_path=base_path,
            allowed_origins=_split_csv(origins) if origins is not None else defaults.allowed_origins,
            allowed_methods=env.get("CORS_ALLOWED_METHODS", defaults.allowed_methods),
            allowed_headers=env.get("CORS_ALLOWED_HEADERS", defaults.allowed_headers),
            max_age_seconds=int(env.get("CORS_MAX_AGE_SECONDS", defaults.max_age_seconds)),
            default_limit=int(env.get("DEFAULT_PAGE_LIMIT", defaults.default_limit)),
            max_limit=int(env.get("MAX_PAGE_LIMIT", defaults.max_limit)),
            database_url=env.get("DATABASE_URL") or None,
            db_secret_arn=env.get("DB_SECRET_ARN") or None,
        )
