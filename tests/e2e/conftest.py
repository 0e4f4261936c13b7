"""API test client wired to the in-memory database and fake providers."""

import json
from typing import List, Optional
from unittest.mock import AsyncMock

import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient

from article_pipeline.agents.agent_chat import ChatAssistant
from article_pipeline.agents.enrichment import ArticleEnricher, EnrichmentConfig
from article_pipeline.agents.enrichment.generation_engine import GenerationEngine
from article_pipeline.agents.enrichment.llm_client import ModelInfo
from article_pipeline.agents.enrichment.research_context import ResearchContextBuilder
from article_pipeline.agents.enrichment.version_manager import VersionManager
from article_pipeline.api import dependencies
from article_pipeline.api.main import app
from article_pipeline.api.middleware.rate_limit import limiter
from tests.conftest import FakeFetcher

ENRICHMENT_JSON = json.dumps(
    {
        "summary": "A short summary. Second sentence.",
        "tags": ["ai", "support", "chatbots"],
        "rewrittenContent": "# Better article\n\nRewritten body [1].",
        "seo": {"score": 81, "readability": "High School", "critique": [], "keywords": ["chatbot"]},
    }
)


class FakeLLM:
    """LLM provider stand-in for generation, chat and model listing."""

    is_configured = True

    def __init__(self) -> None:
        self.response: str = ENRICHMENT_JSON
        self.error: Optional[Exception] = None
        self.models = [
            ModelInfo(name="llama3.1:8b", supports_generation=True, size=4_900_000_000),
            ModelInfo(name="nomic-embed-text", supports_generation=False, size=270_000_000),
        ]
        self.generated_with: List[str] = []

    async def generate(self, model: str, prompt: str, json_mode: bool = True) -> str:
        self.generated_with.append(model)
        if self.error is not None:
            raise self.error
        return self.response

    async def chat(self, model: str, messages: List[dict]) -> str:
        return f"echo: {messages[-1]['content']}"

    async def list_models(self) -> List[ModelInfo]:
        return self.models


async def _no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def api_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def api_search() -> AsyncMock:
    client = AsyncMock()
    client.search = AsyncMock(return_value=[])
    return client


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
async def client(session_factory, api_fetcher, api_search, fake_llm):
    """Create test client."""

    async def override_db_session():
        async with session_factory() as session:
            yield session

    def override_enricher(db=Depends(dependencies.get_db_session)) -> ArticleEnricher:
        config = EnrichmentConfig(models=["llama3.1:8b"], max_attempts_per_model=2)
        return ArticleEnricher(
            db,
            engine=GenerationEngine(fake_llm, config=config, sleep=_no_sleep),
            context_builder=ResearchContextBuilder(api_fetcher),
            version_manager=VersionManager(db),
            config=config,
        )

    app.dependency_overrides[dependencies.get_db_session] = override_db_session
    app.dependency_overrides[dependencies.get_page_fetcher] = lambda: api_fetcher
    app.dependency_overrides[dependencies.get_search_client] = lambda: api_search
    app.dependency_overrides[dependencies.get_llm_client] = lambda: fake_llm
    app.dependency_overrides[dependencies.get_article_enricher] = override_enricher
    app.dependency_overrides[dependencies.get_chat_assistant] = lambda: ChatAssistant(
        provider=fake_llm, model="llama3.1:8b"
    )
    limiter.enabled = False

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()
    limiter.enabled = True
