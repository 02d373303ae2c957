"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Secrets (database credentials) come from environment variables / .env
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env support
    - Defaults for every non-secret setting so a local docker-compose works unchanged
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://pd:pd@localhost:5432/pdtracker"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgresql://; asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 5

    # Listing
    default_page_size: int = Field(50, ge=1, le=200)
    max_page_size: int = Field(200, ge=1, le=200)

    # Certificates
    certificate_rows_per_page: int = Field(18, ge=1)
    certificate_title: str = "Certificate of Professional Development"
    certificate_school_name: str = "Western English Language School"
    certificate_logo_path: str = "static/assets/logo.png"

    # CSV export
    export_page_size: int = Field(200, ge=1)
    export_max_pages: int = Field(2000, ge=1)

    # Actor recorded on staff changes when no X-Actor header is sent
    default_staff_actor: str = "webapp"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]
    static_dir: str = "static"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
