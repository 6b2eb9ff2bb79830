"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All credentials come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — read once per process
    - DB_HOST, DB_USER, DB_PASS and DB_NAME are required unless DATABASE_URL is set;
      a missing one aborts startup with a validation error

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Abort-on-missing over warn-and-continue: a pool with no host fails later and less clearly
    - ALLOWED_ORIGINS kept as a comma-separated string: lists in env vars would otherwise need JSON
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

_REQUIRED_DB_FIELDS = ("db_host", "db_user", "db_pass", "db_name")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    db_host: str | None = None
    db_user: str | None = None
    db_pass: str | None = None
    db_name: str | None = None
    db_port: int = 5432
    db_driver: str = "postgresql+asyncpg"
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v or None

    database_pool_size: int = 10
    database_max_overflow: int = 0
    database_pool_timeout: float = 30.0

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # API
    allowed_origins: str = "*"
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def require_database_credentials(self) -> "Settings":
        if self.database_url:
            return self
        missing = [
            name.upper() for name in _REQUIRED_DB_FIELDS
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}",
            )
        return self

    @property
    def sqlalchemy_url(self) -> str:
        """Full async SQLAlchemy URL, either DATABASE_URL or built from DB_*."""
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_pass,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    @property
    def cors_origins(self) -> list[str]:
        return [
            origin.strip() for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
