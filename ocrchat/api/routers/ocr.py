"""
OCR endpoint.

Routes: POST /ocr/extract-text

Dependencies: ocrchat.application.services.extraction_service
System role: Text extraction HTTP API
"""

from fastapi import APIRouter, Depends

from ocrchat.api.deps import get_current_principal, get_extraction_service
from ocrchat.api.error_handling import handle_service_errors
from ocrchat.application.services import ExtractionService
from ocrchat.models.ocr import ExtractTextRequest, ExtractTextResponse
from ocrchat.models.principal import Principal

router = APIRouter(prefix="/ocr", tags=["ocr"])


@router.post("/extract-text", response_model=ExtractTextResponse)
@handle_service_errors
async def extract_text(
    request: ExtractTextRequest,
    principal: Principal = Depends(get_current_principal),
    extraction_service: ExtractionService = Depends(get_extraction_service),
) -> ExtractTextResponse:
    """Extract text from a previously uploaded file."""
    text = await extraction_service.extract_from_blob(
        request.blob_pathname, request.original_file_name
    )
    return ExtractTextResponse(text=text)
