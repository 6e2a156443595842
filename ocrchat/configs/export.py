"""
Compiled document export layout settings.

Dependencies: pydantic_settings
System role: PDF renderer layout configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExportSettings(BaseSettings):
    """Page geometry and typography for exported PDFs."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EXPORT_",
        case_sensitive=False,
        extra="ignore",
    )

    page_margin: float = Field(default=50.0, description="Margin on every page edge (pt)")
    title_size: float = Field(default=16.0, description="Section title font size")
    body_size: float = Field(default=10.0, description="Body font size")
    body_line_height: float = Field(default=12.0, description="Body line height")
    notice_size: float = Field(default=12.0, description="Placeholder notice font size")
    notice_line_height: float = Field(default=14.0, description="Placeholder notice line height")
    attachment_size: float = Field(default=8.0, description="Attached-file annotation font size")
    attachment_line_height: float = Field(default=10.0, description="Attached-file annotation line height")
