from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "ApplyPath"
    app_env: str = "development"  # development, testing, production
    debug: bool = False

    # Logging
    log_user_emails: bool = False  # Set to False in production for GDPR compliance

    # Database
    database_url: str = "sqlite+aiosqlite:///./applypath.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # Projects
    enforce_deadline_order: bool = False  # Reject deadline < start_date when True
    default_page_size: int = 50
    max_page_size: int = 100

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only async drivers work with the session layer."""
        if not (v.startswith("sqlite+aiosqlite://") or v.startswith("postgresql+asyncpg://")):
            raise ValueError(
                "DATABASE_URL must use an async driver "
                "(sqlite+aiosqlite:// or postgresql+asyncpg://)"
            )
        return v

    @field_validator("max_page_size")
    @classmethod
    def validate_max_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MAX_PAGE_SIZE must be at least 1")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
