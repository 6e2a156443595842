"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from ocrchat.configs.base import BaseSettings
from ocrchat.configs.blob_store import BlobStoreSettings
from ocrchat.configs.database import DatabaseSettings
from ocrchat.configs.export import ExportSettings
from ocrchat.configs.llm import LLMSettings
from ocrchat.configs.ocr import AuthSettings, OCRSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    blob_store: BlobStoreSettings = Field(default_factory=BlobStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    ocr: OCRSettings = Field(default_factory=OCRSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once; call get_settings.cache_clear()
    after changing them (tests do this).

    Returns:
        Settings: Application settings instance
    """
    return Settings()
