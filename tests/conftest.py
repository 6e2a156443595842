"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, principals, fake chat models,
in-process PNG/PDF fixtures
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core, Pillow, PyMuPDF
System role: Test infrastructure and fixture management
"""

import io
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from ocrchat.boundary.db import models  # noqa: F401
    from ocrchat.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def owner():
    """Principal owning the conversations under test."""
    from ocrchat.models.principal import Principal

    return Principal(owner_id="user-1")


@pytest.fixture
def other_owner():
    """Principal that owns nothing."""
    from ocrchat.models.principal import Principal

    return Principal(owner_id="user-2")


@pytest.fixture
def fake_completion_client():
    """
    Completion client backed by LangChain's FakeListChatModel.

    Replies cycle through the given responses.
    """
    from langchain_core.language_models import FakeListChatModel

    from ocrchat.core.completion import CompletionClient

    def _build(*responses: str) -> CompletionClient:
        model = FakeListChatModel(responses=list(responses) or ["The total is $42.00."])
        return CompletionClient(chat_model=model)

    return _build


@pytest.fixture
def failing_completion_client():
    """Completion client whose provider raises on every call."""
    from ocrchat.core.completion import CompletionClient

    model = MagicMock()
    model.ainvoke = AsyncMock(side_effect=RuntimeError("provider down"))
    return CompletionClient(chat_model=model)


@pytest.fixture
def png_bytes() -> bytes:
    """Small white PNG image."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (200, 100), "white").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Small white JPEG image."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (120, 240), "white").save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def pdf_bytes() -> bytes:
    """One-page PDF with a text layer reading 'Total: $42.00'."""
    import fitz

    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Total: $42.00", fontname="helv", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data
