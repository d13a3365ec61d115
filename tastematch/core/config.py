from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from tastematch.core.version import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"
    LOG_LEVEL: str = "INFO"

    REDIS_URL: str = "redis://localhost:6379/0"
    # Maximum number of connections Redis client will open per process
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_KEY_PREFIX: str = "tastematch:"

    # Directory holding catalog JSON / NDJSON files, one per domain
    CATALOG_DIR: str = "data/catalog"

    # Optional remote identity sync
    REMOTE_SYNC_ENABLED: bool = False
    REMOTE_SYNC_URL: str = ""
    REMOTE_SYNC_API_KEY: str | None = None
    REMOTE_SYNC_TIMEOUT: float = 10.0

    DEFAULT_ADVISORY_LEVEL: Literal["soft", "standard", "strict"] = "standard"


settings = Settings()

APP_VERSION = __version__
