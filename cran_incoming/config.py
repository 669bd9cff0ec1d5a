"""Configuration management for the CRAN Incoming Tracker."""

from datetime import timedelta
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # API Settings
    api_title: str = "CRAN Incoming Tracker"
    api_version: str = "1.0.0"
    api_description: str = "Cached snapshots of package submissions in CRAN incoming"
    debug: bool = False

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8080

    # FTP Settings
    ftp_host: str = "cran.r-project.org"
    ftp_port: int = 21
    ftp_user: str = "anonymous"
    ftp_password: str = "anonymous"
    ftp_root: str = "/incoming"
    ftp_timeout_seconds: float = 30.0

    # Crawl Settings
    max_depth: int = 2
    package_file_pattern: str = r"^(.+)_(.+)\.tar\.gz$"
    source_timezone: str = "Europe/Vienna"  # zone the FTP server reports MDTM in

    # Cache Settings
    cache_ttl_seconds: int = 600  # 10 minutes
    capture_workers: int = 1

    # CORS Settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["POST", "GET", "PATCH", "OPTIONS"]
    cors_allow_headers: list[str] = ["*"]

    # Compression
    gzip_minimum_size: int = 1000

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def cache_ttl(self) -> timedelta:
        """Refresh interval as a timedelta."""
        return timedelta(seconds=self.cache_ttl_seconds)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
