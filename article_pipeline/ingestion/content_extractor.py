"""Article title and body extraction from article pages."""

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

MIN_TITLE_LENGTH = 5
MIN_PARAGRAPH_LENGTH = 20

# Layout elements never part of the readable text of a page
NOISE_TAGS = ["script", "style", "nav", "footer", "header", "aside", "noscript"]

# Main content containers by priority
MAIN_CONTENT_SELECTORS = ["article", "main", "body"]


@dataclass(frozen=True)
class ExtractedContent:
    """Title and plain-text body of an article page."""

    title: str
    body: str

    @property
    def is_empty(self) -> bool:
        """Extraction failed when no paragraph survived filtering."""
        return not self.body


def extract_content(html: str, fallback_title: str = "") -> ExtractedContent:
    """
    Extract title and body text from an article page.

    Title is the first h1 text, replaced by fallback_title when empty or
    5 characters or less. Body joins every paragraph longer than 20
    characters with a blank line.

    Args:
        html: Article page HTML
        fallback_title: Title seen on the listing page

    Returns:
        ExtractedContent, check ``is_empty`` before persisting
    """
    if not html:
        return ExtractedContent(title=fallback_title, body="")

    soup = BeautifulSoup(html, "html.parser")

    title = fallback_title
    h1 = soup.find("h1")
    if h1 is not None:
        h1_text = h1.get_text().strip()
        if len(h1_text) > MIN_TITLE_LENGTH:
            title = h1_text

    paragraphs = []
    for paragraph in soup.find_all("p"):
        text = paragraph.get_text().strip()
        if len(text) > MIN_PARAGRAPH_LENGTH:
            paragraphs.append(text)

    return ExtractedContent(title=title, body="\n\n".join(paragraphs))


def extract_readable_text(html: str) -> str:
    """
    Extract the readable text of an arbitrary web page.

    Layout elements are removed, then the text of the first of article,
    main or body is taken with whitespace collapsed.

    Args:
        html: Page HTML

    Returns:
        Plain text, empty when nothing readable was found
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(NOISE_TAGS):
        tag.decompose()

    container = None
    for selector in MAIN_CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            break
    if container is None:
        container = soup

    text = container.get_text(" ")
    return re.sub(r"\s+", " ", text).strip()
