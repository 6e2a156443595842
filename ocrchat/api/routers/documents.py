"""
Document upload endpoint.

Routes: POST /documents/upload

Dependencies: ocrchat.application.services.extraction_service
System role: Upload HTTP API
"""

from fastapi import APIRouter, Depends, File, UploadFile, status

from ocrchat.api.deps import get_current_principal, get_extraction_service
from ocrchat.api.error_handling import handle_service_errors
from ocrchat.application.services import ExtractionService
from ocrchat.models.ocr import UploadResponse
from ocrchat.models.principal import Principal

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def upload_document(
    file: UploadFile = File(...),
    principal: Principal = Depends(get_current_principal),
    extraction_service: ExtractionService = Depends(get_extraction_service),
) -> UploadResponse:
    """Store an uploaded PDF or image and return its blob pointer."""
    data = await file.read()
    return await extraction_service.upload_document(
        principal,
        file_name=file.filename or "",
        data=data,
        content_type=file.content_type,
    )
