from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from leadgrid.clients.crm_client_sdk.config import DEFAULT_BASE_URL, SDKConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LEADGRID_", env_file=".env", extra="ignore")

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    retry_max_attempts: int = 1
    retry_backoff_ms: int = 150
    default_page_size: int = 20
    search_debounce_ms: int = 500
    log_level: str = "INFO"

    def validate_config(self) -> "AppConfig":
        if not self.base_url.strip():
            raise ValueError("LEADGRID_BASE_URL cannot be empty")
        if self.timeout_seconds <= 0:
            raise ValueError("LEADGRID_TIMEOUT_SECONDS must be greater than 0")
        if self.retry_max_attempts < 1:
            raise ValueError("LEADGRID_RETRY_MAX_ATTEMPTS must be >= 1")
        if self.retry_backoff_ms < 0:
            raise ValueError("LEADGRID_RETRY_BACKOFF_MS must be >= 0")
        if self.default_page_size < 1:
            raise ValueError("LEADGRID_DEFAULT_PAGE_SIZE must be >= 1")
        if self.log_level.strip().upper() not in LOG_LEVELS:
            raise ValueError(f"LEADGRID_LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}")
        return self

    def to_sdk_config(self) -> SDKConfig:
        return SDKConfig(
            base_url=self.base_url,
            timeout_seconds=self.timeout_seconds,
            verify_ssl=self.verify_ssl,
            retry_max_attempts=self.retry_max_attempts,
            retry_backoff_ms=self.retry_backoff_ms,
        )
