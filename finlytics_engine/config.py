"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "finlytics-engine"
    log_level: str = "INFO"

    # Defaults applied when a request omits them
    default_fiscal_year: str = "2024-2025"
    default_taxpayer_category: str = "general"

    # Oracle output is only accepted from callers when enabled
    oracle_enabled: bool = True


settings = Settings()
