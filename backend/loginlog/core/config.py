import os
from importlib import metadata

from pydantic import field_validator
from pydantic_settings import BaseSettings


def _get_version() -> str:
    """Read version from environment variable or installed package metadata."""
    # First check environment variable (for Docker/CI overrides)
    if env_version := os.getenv("LOGINLOG_VERSION"):
        return env_version

    try:
        return metadata.version("loginlog")
    except metadata.PackageNotFoundError:
        return "0.0.0-dev"


# Application version - env var, installed metadata, or default to dev
APP_VERSION = _get_version()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    # App
    APP_NAME: str = "loginlog"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "loginlog"
    POSTGRES_PASSWORD: str = "devpassword"
    POSTGRES_DB: str = "loginlog"

    # Full SQLAlchemy async URL, takes precedence over the POSTGRES_* parts
    # e.g. sqlite+aiosqlite:///./loginlog.db
    DATABASE_URI: str | None = None

    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40

    # Alembic is the managed path; create_all keeps single-process dev runs zero-config
    AUTO_CREATE_TABLES: bool = True

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URI:
            return self.DATABASE_URI
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # Password hashing work factor (bcrypt cost)
    BCRYPT_ROUNDS: int = 10

    # Default number of records returned by the list endpoint
    LIST_LIMIT: int = 50

    # Comma-separated list of allowed origins, "*" for any
    CORS_ORIGINS: str = "*"

    # Only honour X-Forwarded-For / X-Real-IP when running behind a trusted proxy
    TRUST_PROXY_HEADERS: bool = False

    MAX_REQUEST_SIZE: int = 1024 * 1024  # 1 MiB

    # Directory with the capture front end, served at "/" when set
    STATIC_DIR: str | None = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt accepts cost factors 4..31
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("LIST_LIMIT")
    @classmethod
    def validate_list_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("LIST_LIMIT must be a positive integer")
        return v

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
