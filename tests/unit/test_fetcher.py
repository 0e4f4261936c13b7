"""Unit tests for the page fetcher."""

import httpx
import pytest

from article_pipeline.ingestion.fetcher import PageFetcher
from article_pipeline.utils.exceptions import ScrapingError

URL = "https://example.com/blogs/post"


def _fetcher(handler) -> PageFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PageFetcher(timeout=1.0, user_agent="TestAgent/1.0", client=client)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_returns_html_and_sends_user_agent() -> None:
    """Test successful fetch with configured headers."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["user_agent"] = request.headers["User-Agent"]
        return httpx.Response(200, text="<html>ok</html>")

    html = await _fetcher(handler).fetch(URL)

    assert html == "<html>ok</html>"
    assert seen["user_agent"] == "TestAgent/1.0"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_http_error_status() -> None:
    """Test that non-2xx responses raise ScrapingError."""
    fetcher = _fetcher(lambda request: httpx.Response(404, text="missing"))

    with pytest.raises(ScrapingError) as exc_info:
        await fetcher.fetch(URL)

    assert exc_info.value.reason == "HTTP 404"
    assert exc_info.value.url == URL


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_timeout() -> None:
    """Test that timeouts raise ScrapingError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ScrapingError) as exc_info:
        await _fetcher(handler).fetch(URL)

    assert exc_info.value.reason == "Timeout"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_connection_error() -> None:
    """Test that connection failures raise ScrapingError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ScrapingError) as exc_info:
        await _fetcher(handler).fetch(URL)

    assert exc_info.value.reason.startswith("Connection error")
