from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Short Link Proxy"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Short.io upstream
    short_io_api_key: Optional[str] = None
    short_io_domain: Optional[str] = None
    short_io_api_base_url: str = "https://api.short.io/api"
    request_timeout: float = 15.0  # Seconds per upstream call

    # Request handling
    default_page_limit: int = 50
    max_body_bytes: int = 1_000_000

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_configured(self) -> bool:
        """Both the API key and the short domain are required to talk upstream"""
        return bool(self.short_io_api_key) and bool(self.short_io_domain)


# Create settings instance
settings = Settings()
