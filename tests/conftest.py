"""Shared fixtures: in-memory database and fake network collaborators."""

import os

# Never reach a real database from the test-suite
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")

from typing import AsyncGenerator, Dict, List, Optional, Union

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from article_pipeline.database import models  # noqa: F401
from article_pipeline.database.db_session import Base
from article_pipeline.utils.exceptions import ScrapingError


@pytest.fixture
async def db_engine():
    """In-memory SQLite engine with the articles schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests."""
    async with session_factory() as session:
        yield session


class FakeFetcher:
    """PageFetcher stand-in serving canned HTML per URL."""

    def __init__(self, pages: Optional[Dict[str, Union[str, Exception]]] = None) -> None:
        self.pages = dict(pages or {})
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise ScrapingError(url, "HTTP 404")
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


def article_page(title: str, paragraphs: List[str]) -> str:
    body = "".join(f"<p>{paragraph}</p>" for paragraph in paragraphs)
    return f"<html><body><h1>{title}</h1>{body}</body></html>"
