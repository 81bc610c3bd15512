"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden by an environment variable of the same name
    - get_settings() is cached (lru_cache) — single instance per process
    - Defaults boot a working service with an in-memory database and a seeded admin

Design Decisions:
    - In-memory SQLite by default; any SQLAlchemy async URL works (postgres via asyncpg)
    - ENVIRONMENT gates exception text in 500 responses (development only)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Service
    service_name: str = "user-management-api"
    version: str = "1.0.0"
    environment: str = "production"

    # Database
    database_url: str = "sqlite+aiosqlite:///:memory:"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Token issuance
    jwt_key: str = "this_is_a_super_long_secret_key_1234567890"
    jwt_issuer: str = "yourapp"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60

    # Built-in administrator login
    admin_username: str = "admin"
    admin_password: str = "1234"

    # Startup seed
    seed_admin: bool = True
    seed_admin_name: str = "Admin"
    seed_admin_email: str = "admin@techhive.com"
    seed_admin_password: str = "1234"

    # bcrypt cost factor (4-31)
    password_hash_rounds: int = 12

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"
    log_body_max_chars: int = 2048

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
