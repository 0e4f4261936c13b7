"""Web search tool for research candidates (DuckDuckGo-based)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Optional

from ddgs import DDGS

from article_pipeline.utils.exceptions import SearchProviderError
from article_pipeline.utils.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """One organic search result."""

    link: str
    title: Optional[str]
    description: Optional[str]


class WebSearchClient:
    """Async web search wrapper using DuckDuckGo Search."""

    def __init__(self, client: Optional[DDGS] = None) -> None:
        self._client = client or DDGS()

    def _search_sync(self, query: str, limit: int) -> List[SearchResult]:
        raw_results = self._client.text(query, max_results=limit) or []
        results = []
        for item in raw_results:
            link = item.get("href") or item.get("link")
            if not link:
                continue
            results.append(
                SearchResult(
                    link=link,
                    title=item.get("title"),
                    description=item.get("body") or item.get("description"),
                )
            )
        return results

    async def search(self, query: str, limit: int = 5) -> List[SearchResult]:
        """
        Run a web search.

        Args:
            query: Search query
            limit: Maximum number of results requested from the provider

        Returns:
            Search results in provider order

        Raises:
            SearchProviderError: If the provider call fails
        """
        try:
            results = await asyncio.to_thread(self._search_sync, query, limit)
        except Exception as exc:
            logger.error(
                "web_search_failed",
                query=query,
                error=str(exc),
            )
            raise SearchProviderError(f"Web search failed: {exc}") from exc

        logger.info(
            "web_search_completed",
            query=query,
            results_count=len(results),
        )
        return results
