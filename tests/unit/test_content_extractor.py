"""Unit tests for article content extraction."""

import pytest

from article_pipeline.ingestion.content_extractor import extract_content, extract_readable_text

LONG_PARAGRAPH = "This paragraph is comfortably longer than twenty characters."


@pytest.mark.unit
class TestExtractContent:
    """Test extract_content function."""

    def test_h1_title_and_paragraphs(self) -> None:
        """Test title from h1 and body from long paragraphs."""
        html = f"""
        <html><body>
            <h1>Chatbots in Healthcare</h1>
            <p>{LONG_PARAGRAPH}</p>
            <p>Too short</p>
            <p>Another paragraph that is long enough to keep.</p>
        </body></html>
        """
        content = extract_content(html, fallback_title="Listing title")
        assert content.title == "Chatbots in Healthcare"
        assert content.body == f"{LONG_PARAGRAPH}\n\nAnother paragraph that is long enough to keep."
        assert not content.is_empty

    def test_short_h1_uses_fallback_title(self) -> None:
        """Test that a short h1 falls back to the listing title."""
        html = f"<h1>Blog</h1><p>{LONG_PARAGRAPH}</p>"
        content = extract_content(html, fallback_title="Listing title")
        assert content.title == "Listing title"

    def test_missing_h1_uses_fallback_title(self) -> None:
        """Test that a page without h1 keeps the listing title."""
        content = extract_content(f"<p>{LONG_PARAGRAPH}</p>", fallback_title="Listing title")
        assert content.title == "Listing title"

    def test_no_long_paragraph_is_empty(self) -> None:
        """Test that pages without qualifying paragraphs are empty."""
        html = "<h1>Some long title</h1><p>short</p><div>Not a paragraph but long text here</div>"
        content = extract_content(html, fallback_title="Fallback")
        assert content.body == ""
        assert content.is_empty

    def test_paragraph_of_exactly_twenty_chars_is_dropped(self) -> None:
        """Test the paragraph length threshold is exclusive."""
        content = extract_content("<p>" + "x" * 20 + "</p><p>" + "y" * 21 + "</p>")
        assert content.body == "y" * 21

    def test_inline_markup_keeps_word_spacing(self) -> None:
        """Test that links and emphasis inside a paragraph keep their spacing."""
        html = (
            "<h1>A <em>real</em> heading</h1>"
            "<p>Chatbots help <a href='/x'>support teams</a> answer faster every day.</p>"
            "<p>Replies are <b>short</b>, <i>clear</i> and always on time.</p>"
        )
        content = extract_content(html)
        assert content.title == "A real heading"
        assert content.body == (
            "Chatbots help support teams answer faster every day.\n\n"
            "Replies are short, clear and always on time."
        )

    def test_empty_html(self) -> None:
        """Test extracting from empty HTML."""
        content = extract_content("", fallback_title="Fallback")
        assert content.title == "Fallback"
        assert content.is_empty


@pytest.mark.unit
class TestExtractReadableText:
    """Test extract_readable_text function."""

    def test_removes_layout_elements(self) -> None:
        """Test that scripts, navigation and footers are removed."""
        html = """
        <html><body>
            <nav>Home About</nav>
            <script>var tracking = 1;</script>
            <article><p>Main   article
            text</p></article>
            <footer>Copyright</footer>
        </body></html>
        """
        text = extract_readable_text(html)
        assert text == "Main article text"

    def test_prefers_main_over_body(self) -> None:
        """Test container priority when no article element exists."""
        html = "<body><div>Sidebar noise</div><main>Main content</main></body>"
        assert extract_readable_text(html) == "Main content"

    def test_falls_back_to_body(self) -> None:
        """Test body text is used without article or main."""
        html = "<body><div>First</div><div>Second</div></body>"
        assert extract_readable_text(html) == "First Second"

    def test_empty_html(self) -> None:
        """Test extracting from empty HTML."""
        assert extract_readable_text("") == ""
