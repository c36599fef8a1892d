"""
storefront/config.py - Application configuration.

This module defines a Pydantic BaseSettings class to load configuration from the
environment (or a `.env` file). Other modules import `settings` from here; the
stores themselves are built per application in `storefront.main`.
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    storefront_api_url: str = Field("http://localhost:5000", description="Catalog REST base URL")
    catalog_timeout: float = Field(5.0, description="Seconds before a catalog call gives up")

    storage_backend: Literal["memory", "file"] = "memory"
    storage_dir: str = ".storefront"  # used when storage_backend == "file"
    recently_viewed_limit: int = 8

    debug: bool = False
    allowed_origins: str = "*"  # Comma-separated list or '*' for all


# Load settings from environment (.env file, etc.)
settings = Settings()
