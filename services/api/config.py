"""Configuration using pydantic-settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Shopify Storefront API
    shopify_store_domain: str = ""
    shopify_storefront_access_token: str = ""
    shopify_api_version: str = "2025-01"
    request_timeout: float = 10.0

    # Catalog
    collection_handle: str = "frontpage"
    collection_page_size: int = 20

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = "data/logs/storefront.log"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()
