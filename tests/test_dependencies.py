"""
Test suite for dependency injection container and settings.

Tests service factories, the collaborator cache, principal resolution
and environment-driven configuration.

System role: Verification of DI container
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from ocrchat.api.deps import (
    ServiceCache,
    get_chat_service,
    get_current_principal,
    get_export_service,
    get_extraction_service,
)
from ocrchat.application.services import ChatService, ExportService, ExtractionService
from ocrchat.configs import Settings, get_settings
from ocrchat.core.pdf_export import CompiledDocumentRenderer
from ocrchat.core.text_extraction import TextExtractor


def make_request(headers: dict[str, str]) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        }
    )


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestServiceFactories:
    """Test suite for per-request service factories."""

    def test_get_chat_service_uses_history_cap(self, mock_db_session, monkeypatch) -> None:
        # Arrange
        monkeypatch.setenv("LLM_MAX_HISTORY_TURNS", "6")
        client = MagicMock()

        # Act
        service = get_chat_service(
            db=mock_db_session, completion_client=client, settings=get_settings()
        )

        # Assert
        assert isinstance(service, ChatService)
        assert service.completion_client is client
        assert service.max_history_turns == 6

    def test_get_export_service(self, mock_db_session) -> None:
        renderer = CompiledDocumentRenderer()
        service = get_export_service(db=mock_db_session, blob_store=MagicMock(), renderer=renderer)

        assert isinstance(service, ExportService)
        assert service.renderer is renderer

    def test_get_extraction_service_uses_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("BLOB_STORE_UPLOAD_PREFIX", "/incoming/")

        service = get_extraction_service(
            blob_store=MagicMock(), extractor=MagicMock(), settings=get_settings()
        )

        assert isinstance(service, ExtractionService)
        assert service.upload_prefix == "incoming"


class TestServiceCache:
    """Test suite for ServiceCache."""

    def test_collaborators_are_cached(self) -> None:
        cache = ServiceCache()

        assert cache.renderer is cache.renderer
        assert isinstance(cache.text_extractor, TextExtractor)
        assert cache.text_extractor is cache.text_extractor

    def test_blob_store_reads_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("BLOB_STORE_BUCKET", "ocr-uploads")
        monkeypatch.setenv("BLOB_STORE_REGION", "eu-west-1")

        store = ServiceCache().blob_store

        assert store.bucket == "ocr-uploads"
        assert store._region == "eu-west-1"

    @pytest.mark.asyncio
    async def test_aclose_closes_completion_client(self) -> None:
        cache = ServiceCache()
        client = MagicMock()
        client.aclose = AsyncMock()
        cache._completion_client = client
        renderer = cache.renderer

        await cache.aclose()

        client.aclose.assert_awaited_once()
        assert cache._completion_client is None
        assert cache.renderer is not renderer


class TestCurrentPrincipal:
    """Test suite for get_current_principal."""

    def test_reads_default_header(self) -> None:
        principal = get_current_principal(make_request({"X-User-Id": "user-1"}), get_settings())

        assert principal.owner_id == "user-1"

    def test_missing_or_blank_header(self) -> None:
        for headers in [{}, {"X-User-Id": "   "}]:
            with pytest.raises(HTTPException) as exc_info:
                get_current_principal(make_request(headers), get_settings())
            assert exc_info.value.status_code == 401

    def test_custom_header(self, monkeypatch) -> None:
        monkeypatch.setenv("AUTH_OWNER_HEADER", "X-Forwarded-User")

        principal = get_current_principal(
            make_request({"X-Forwarded-User": "alice"}), get_settings()
        )

        assert principal.owner_id == "alice"


class TestSettings:
    """Test suite for environment-driven settings."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.auth.owner_header == "X-User-Id"
        assert settings.llm.max_history_turns == 20
        assert settings.export.page_margin == 50.0
        assert settings.blob_store.upload_prefix == "uploads"

    def test_database_url_override(self, monkeypatch) -> None:
        monkeypatch.setenv("POSTGRES_URL", "sqlite+aiosqlite:///./local.db")

        settings = Settings()

        assert settings.database.async_database_url == "sqlite+aiosqlite:///./local.db"
        assert settings.database.is_sqlite is True

    def test_postgres_url_is_assembled(self, monkeypatch) -> None:
        monkeypatch.delenv("POSTGRES_URL", raising=False)
        monkeypatch.setenv("POSTGRES_HOST", "db")
        monkeypatch.setenv("POSTGRES_SSLMODE", "require")

        url = Settings().database.async_database_url

        assert url.startswith("postgresql+asyncpg://")
        assert "@db:5432/" in url
        assert url.endswith("?ssl=require")
