"""Configuration management using pydantic-settings.

Loads from environment variables and .env file.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Attributes:
        cache_type: Cache backend, either "disk" or "memory".
        cache_dir: Directory holding cached image bytes for the disk backend.
        fetch_timeout: HTTP timeout for image downloads in seconds.
        user_agent: User-Agent header sent with every download.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Output logs in JSON format for production.
        log_file: Optional path of a rotating log file.

    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Cache
    cache_type: str = "disk"  # disk | memory
    cache_dir: str = "./data/image-cache"

    # Network
    fetch_timeout: float = 30.0
    user_agent: str = "image-fetcher/0.1.0"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None

    @property
    def cache_path(self) -> Path:
        """Return the cache directory as a Path object.

        Returns:
            Path: Resolved path to the disk cache directory.

        """
        return Path(self.cache_dir)


# Global settings instance
settings = Settings()
