"""Application configuration settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Property Listings API"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database - PostgreSQL in production, SQLite locally
    DATABASE_URL: str = "sqlite:///./properties.db"
    DB_SSL_CA: str | None = None
    DB_POOL_SIZE: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a free connection
    DB_POOL_RECYCLE: int = 10  # seconds before an idle connection is replaced
    DB_ECHO: bool = False

    # Uploads
    UPLOAD_DIR: Path = Path("uploads")
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    @property
    def is_development(self) -> bool:
        """Whether error details and SQL echo should be exposed."""
        return self.ENVIRONMENT.lower() == "development"


def get_settings() -> Settings:
    """Build settings from the environment."""
    return Settings()
