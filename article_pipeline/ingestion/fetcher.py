"""Async page fetching with timeout and User-Agent configuration."""

from typing import Optional

import httpx

from article_pipeline.config.settings import settings
from article_pipeline.utils.exceptions import ScrapingError
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)


class PageFetcher:
    """Fetch raw HTML from third-party sites."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            timeout: Per-request timeout in seconds (default: settings.fetch_timeout_seconds)
            user_agent: User-Agent header (default: settings.user_agent)
            client: Shared httpx client, a short-lived client per call otherwise
        """
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_seconds
        self.user_agent = user_agent or settings.user_agent
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    async def fetch(self, url: str) -> str:
        """
        Fetch a page and return its HTML.

        Args:
            url: Page URL

        Returns:
            Response body as text

        Raises:
            ScrapingError: On timeout, connection failure or non-2xx status
        """
        try:
            if self._client is not None:
                response = await self._client.get(
                    url,
                    headers=self.headers,
                    timeout=self.timeout,
                    follow_redirects=True,
                )
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout,
                    follow_redirects=True,
                    headers=self.headers,
                ) as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ScrapingError(url, "Timeout") from e
        except httpx.HTTPStatusError as e:
            raise ScrapingError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ScrapingError(url, f"Connection error: {str(e)[:100]}") from e

        logger.debug("Page fetched", url=url, status_code=response.status_code, size=len(response.text))
        return response.text
