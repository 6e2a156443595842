"""
Test suite for upload and OCR endpoints.

System role: Verification of the upload -> OCR HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ocrchat.api.deps import get_extraction_service
from ocrchat.api.routers import documents_router, ocr_router
from ocrchat.core.exceptions import (
    BlobNotFoundError,
    ExtractionEngineError,
    UnsupportedFileTypeError,
)
from ocrchat.models.ocr import UploadResponse

HEADERS = {"X-User-Id": "user-1"}


@pytest.fixture
def mock_extraction_service() -> MagicMock:
    return MagicMock()


@pytest.fixture
def client(mock_extraction_service) -> TestClient:
    app = FastAPI()
    app.include_router(documents_router)
    app.include_router(ocr_router)
    app.dependency_overrides[get_extraction_service] = lambda: mock_extraction_service
    return TestClient(app)


class TestUploadEndpoint:
    """Test suite for POST /documents/upload."""

    def test_upload_returns_pointer(self, client: TestClient, mock_extraction_service) -> None:
        # Arrange
        mock_extraction_service.upload_document = AsyncMock(
            return_value=UploadResponse(
                blob_pointer="uploads/user-1/abc-invoice.pdf",
                file_name="invoice.pdf",
                content_type="application/pdf",
                size=8,
            )
        )

        # Act
        response = client.post(
            "/documents/upload",
            files={"file": ("invoice.pdf", b"%PDF-1.4", "application/pdf")},
            headers=HEADERS,
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["blobPointer"] == "uploads/user-1/abc-invoice.pdf"
        kwargs = mock_extraction_service.upload_document.call_args.kwargs
        assert kwargs["file_name"] == "invoice.pdf"
        assert kwargs["data"] == b"%PDF-1.4"
        assert kwargs["content_type"] == "application/pdf"

    def test_upload_unsupported_type(self, client: TestClient, mock_extraction_service) -> None:
        mock_extraction_service.upload_document = AsyncMock(
            side_effect=UnsupportedFileTypeError("docx")
        )

        response = client.post(
            "/documents/upload",
            files={"file": ("notes.docx", b"1", "application/octet-stream")},
            headers=HEADERS,
        )

        assert response.status_code == 400
        assert "docx" in response.json()["detail"]

    def test_upload_requires_principal(self, client: TestClient) -> None:
        response = client.post(
            "/documents/upload", files={"file": ("a.png", b"1", "image/png")}
        )

        assert response.status_code == 401


class TestExtractTextEndpoint:
    """Test suite for POST /ocr/extract-text."""

    def test_returns_text(self, client: TestClient, mock_extraction_service) -> None:
        mock_extraction_service.extract_from_blob = AsyncMock(return_value="Total: $42.00")

        response = client.post(
            "/ocr/extract-text",
            json={
                "blobPathname": "uploads/user-1/abc-invoice.pdf",
                "originalFileName": "invoice.pdf",
            },
            headers=HEADERS,
        )

        assert response.status_code == 200
        assert response.json() == {"text": "Total: $42.00"}
        mock_extraction_service.extract_from_blob.assert_awaited_once_with(
            "uploads/user-1/abc-invoice.pdf", "invoice.pdf"
        )

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (UnsupportedFileTypeError("docx"), 400),
            (BlobNotFoundError("uploads/user-1/gone.png"), 404),
            (ExtractionEngineError("OCR engine failed", file_type="png"), 500),
        ],
    )
    def test_error_mapping(
        self, client: TestClient, mock_extraction_service, error, status_code
    ) -> None:
        mock_extraction_service.extract_from_blob = AsyncMock(side_effect=error)

        response = client.post(
            "/ocr/extract-text",
            json={"blobPathname": "uploads/user-1/x.png", "originalFileName": "x.png"},
            headers=HEADERS,
        )

        assert response.status_code == status_code

    def test_missing_fields(self, client: TestClient) -> None:
        response = client.post("/ocr/extract-text", json={"blobPathname": ""}, headers=HEADERS)

        assert response.status_code == 422
