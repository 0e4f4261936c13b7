"""FastAPI dependencies for database sessions and pipeline agents."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from article_pipeline.agents.agent_chat import ChatAssistant
from article_pipeline.agents.agent_ingestion import DeduplicatingIngestor
from article_pipeline.agents.agent_research import ResearchCoordinator
from article_pipeline.agents.enrichment.article_enricher import ArticleEnricher
from article_pipeline.agents.enrichment.llm_client import OllamaClient
from article_pipeline.agents.tools.web_search import WebSearchClient
from article_pipeline.database.db_session import get_db
from article_pipeline.ingestion.fetcher import PageFetcher

__all__ = [
    "get_db_session",
    "get_page_fetcher",
    "get_search_client",
    "get_llm_client",
    "get_ingestor",
    "get_research_coordinator",
    "get_article_enricher",
    "get_chat_assistant",
]


async def get_db_session() -> AsyncSession:
    """Dependency for FastAPI to get database session."""
    async for session in get_db():
        yield session


def get_page_fetcher() -> PageFetcher:
    return PageFetcher()


def get_search_client() -> WebSearchClient:
    return WebSearchClient()


def get_llm_client() -> OllamaClient:
    return OllamaClient()


def get_ingestor(
    db: AsyncSession = Depends(get_db_session),
    fetcher: PageFetcher = Depends(get_page_fetcher),
) -> DeduplicatingIngestor:
    return DeduplicatingIngestor(db, fetcher=fetcher)


def get_research_coordinator(
    db: AsyncSession = Depends(get_db_session),
    search_client: WebSearchClient = Depends(get_search_client),
) -> ResearchCoordinator:
    return ResearchCoordinator(db, search_client=search_client)


def get_article_enricher(
    db: AsyncSession = Depends(get_db_session),
) -> ArticleEnricher:
    return ArticleEnricher(db)


def get_chat_assistant(
    llm_client: OllamaClient = Depends(get_llm_client),
) -> ChatAssistant:
    return ChatAssistant(provider=llm_client)
