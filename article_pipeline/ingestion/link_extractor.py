"""Article link extraction from blog listing pages."""

from dataclasses import dataclass
from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from article_pipeline.config.settings import settings
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)

MIN_TITLE_LENGTH = 5


@dataclass(frozen=True)
class LinkCandidate:
    """Title and canonical URL discovered on a listing page."""

    title: str
    url: str


def _is_listing_root(url: str, base_url: str) -> bool:
    return url.rstrip("/") == base_url.rstrip("/")


def extract_links(
    html: str,
    base_url: str,
    article_path_segment: Optional[str] = None,
    excluded_segments: Optional[Iterable[str]] = None,
) -> List[LinkCandidate]:
    """
    Extract genuine article links from a listing page.

    Relative hrefs are resolved against base_url. Links without href, with a
    title of 5 characters or less, outside the article path, on tag,
    pagination or author listings, or pointing at the listing root itself are
    discarded. Duplicates are removed by exact URL, first occurrence wins.

    Args:
        html: Listing page HTML
        base_url: Listing page URL
        article_path_segment: Path segment every article URL contains
        excluded_segments: Path segments marking non-article listings

    Returns:
        Link candidates in document order
    """
    if not html or not isinstance(html, str):
        return []

    segment = article_path_segment or settings.article_path_segment
    excluded = list(excluded_segments if excluded_segments is not None else settings.excluded_path_segments)

    soup = BeautifulSoup(html, "html.parser")
    seen: set[str] = set()
    candidates: List[LinkCandidate] = []

    for anchor in soup.find_all("a"):
        href = anchor.get("href")
        if not href or not href.strip():
            continue

        title = anchor.get_text().strip()
        if len(title) <= MIN_TITLE_LENGTH:
            continue

        try:
            url = urljoin(base_url, href.strip())
        except ValueError:
            continue

        if urlparse(url).scheme not in ("http", "https"):
            continue
        if segment not in url:
            continue
        if any(excluded_segment in url for excluded_segment in excluded):
            continue
        if _is_listing_root(url, base_url):
            continue
        if url in seen:
            continue

        seen.add(url)
        candidates.append(LinkCandidate(title=title, url=url))

    logger.debug("Links extracted", base_url=base_url, count=len(candidates))
    return candidates
