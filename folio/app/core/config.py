# folio/app/core/config.py
"""
Settings for the Folio API, read with pydantic-settings.

Values come from the environment first, then a local .env file, then the
defaults below. The defaults run a development server against a local SQLite
file; production sets ENVIRONMENT=production, DATABASE_URL and the
Cloudinary credentials.
"""
from functools import lru_cache
from typing import List, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./folio.db"

# Plain driver prefixes and the async drivers SQLAlchemy needs instead
_ASYNC_DRIVERS: Tuple[Tuple[str, str, str], ...] = (
    # (prefix, replacement, marker meaning "already async")
    ("postgres://", "postgresql+asyncpg://", "+asyncpg"),
    ("postgresql://", "postgresql+asyncpg://", "+asyncpg"),
    ("sqlite:///", "sqlite+aiosqlite:///", "+aiosqlite"),
)

MIN_BCRYPT_ROUNDS = 12


def async_database_url(url: str) -> str:
    """
    >>> async_database_url("postgres://u:p@db/folio")
    'postgresql+asyncpg://u:p@db/folio'
    >>> async_database_url("sqlite:///./dev.db")
    'sqlite+aiosqlite:///./dev.db'
    """
    url = url.strip()
    for prefix, replacement, marker in _ASYNC_DRIVERS:
        if url.startswith(prefix) and marker not in url:
            return replacement + url[len(prefix):]
    return url


def split_origins(raw: str) -> List[str]:
    """Comma separated origins; blank means none at all, never "*"."""
    return [origin.strip() for origin in (raw or "").split(",") if origin.strip()]


class Settings(BaseSettings):
    # ─────────────────────────────────────────────────────────────
    # Application
    # ─────────────────────────────────────────────────────────────
    PROJECT_NAME: str = "Folio"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # "production" turns on the Secure cookie flag
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # ─────────────────────────────────────────────────────────────
    # Sessions and passwords
    # One TTL drives both the cookie max-age and the server-side expiry
    # ─────────────────────────────────────────────────────────────
    SESSION_COOKIE_NAME: str = "auth-token"
    SESSION_TTL_DAYS: int = 7
    BCRYPT_ROUNDS: int = MIN_BCRYPT_ROUNDS

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        if v < MIN_BCRYPT_ROUNDS:
            raise ValueError(f"BCRYPT_ROUNDS must be at least {MIN_BCRYPT_ROUNDS}")
        return v

    # ─────────────────────────────────────────────────────────────
    # Database
    # Any postgres/sqlite URL is accepted and moved onto its async driver
    # ─────────────────────────────────────────────────────────────
    DATABASE_URL: str = DEFAULT_DATABASE_URL
    # Logs every SQL statement; keep off in production
    DATABASE_ECHO: bool = False

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v):
        if v is None:
            return DEFAULT_DATABASE_URL
        return async_database_url(v)

    # ─────────────────────────────────────────────────────────────
    # Media host (Cloudinary). Uploads fail with 502 until these are set.
    # ─────────────────────────────────────────────────────────────
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    MEDIA_ROOT_FOLDER: str = "portfolio"
    MEDIA_TIMEOUT_SECONDS: int = 30

    # ─────────────────────────────────────────────────────────────
    # CORS
    # ─────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def BACKEND_CORS_ORIGINS(self) -> List[str]:
        return split_origins(self.CORS_ORIGINS)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.lower().startswith("sqlite")

    @property
    def session_max_age(self) -> int:
        """Seconds; 604800 for the default week."""
        return self.SESSION_TTL_DAYS * 24 * 60 * 60

    @property
    def media_configured(self) -> bool:
        return all((self.CLOUDINARY_CLOUD_NAME, self.CLOUDINARY_API_KEY, self.CLOUDINARY_API_SECRET))


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
