"""
Blob store configuration.

Settings for the S3 bucket holding uploaded source documents.

Dependencies: pydantic_settings
System role: Blob store configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlobStoreSettings(BaseSettings):
    """Settings for S3-backed blob storage."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BLOB_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="",
        description="S3 bucket for uploaded documents (empty = not configured)",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for the bucket",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom endpoint for S3-compatible stores (MinIO, LocalStack)",
    )
    upload_prefix: str = Field(
        default="uploads",
        description="Key prefix for documents stored through the upload endpoint",
    )
