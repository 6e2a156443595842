"""
Extraction and upload schemas.

Dependencies: pydantic
System role: OCR / upload API contracts
"""

from pydantic import Field

from ocrchat.models.common import CamelModel


class ExtractTextRequest(CamelModel):
    blob_pathname: str = Field(min_length=1, description="Storage pathname of the upload")
    original_file_name: str = Field(min_length=1, description="User-facing file name")


class ExtractTextResponse(CamelModel):
    text: str


class UploadResponse(CamelModel):
    """Where an uploaded file was stored."""

    blob_pointer: str
    file_name: str
    content_type: str
    size: int
