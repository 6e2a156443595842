"""
OCR and auth settings.

Dependencies: pydantic_settings
System role: Text extraction and principal resolution configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OCRSettings(BaseSettings):
    """Settings for the tesseract OCR backend."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OCR_",
        case_sensitive=False,
        extra="ignore",
    )

    language: str = Field(default="eng", description="Tesseract trained language")
    tesseract_cmd: str | None = Field(
        default=None,
        description="Path to the tesseract binary when it is not on PATH",
    )


class AuthSettings(BaseSettings):
    """Settings for the trusted authentication header."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    owner_header: str = Field(
        default="X-User-Id",
        description="Header set by the auth proxy with the authenticated owner id",
    )
