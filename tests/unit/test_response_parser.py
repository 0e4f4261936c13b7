"""Unit tests for LLM response parsing."""

import json

import pytest

from article_pipeline.agents.enrichment.response_parser import (
    SeoAnalysis,
    extract_json_text,
    parse_llm_response,
)
from article_pipeline.utils.exceptions import MalformedResponseError

VALID_PAYLOAD = {
    "summary": "Two sentences. About chatbots.",
    "tags": ["ai", "chatbots", "support"],
    "rewrittenContent": "# Chatbots\n\nBetter body.",
    "seo": {
        "score": 82,
        "readability": "High School",
        "critique": ["Use more active voice"],
        "keywords": ["chatbot"],
    },
}


@pytest.mark.unit
class TestExtractJsonText:
    """Test extract_json_text function."""

    def test_strips_code_fences(self) -> None:
        raw = "```json\n{\"a\": 1}\n```"
        assert extract_json_text(raw) == '{"a": 1}'

    def test_strips_surrounding_prose(self) -> None:
        raw = 'Sure! Here is the result: {"a": {"b": 2}} Hope this helps.'
        assert extract_json_text(raw) == '{"a": {"b": 2}}'

    def test_text_without_braces_is_returned_stripped(self) -> None:
        assert extract_json_text("  no json here  ") == "no json here"

    def test_inner_code_fence_is_kept(self) -> None:
        raw = "```json\n{\"a\": \"```bash\\nls\\n```\"}\n```"
        assert extract_json_text(raw) == '{"a": "```bash\\nls\\n```"}'


@pytest.mark.unit
class TestParseLlmResponse:
    """Test parse_llm_response function."""

    def test_parses_valid_payload(self) -> None:
        result = parse_llm_response(json.dumps(VALID_PAYLOAD))
        assert result.summary == "Two sentences. About chatbots."
        assert result.tags == ["ai", "chatbots", "support"]
        assert result.rewritten_content.startswith("# Chatbots")
        assert result.seo.score == 82
        assert result.seo.competitor_gap_analysis is None

    def test_recovers_fenced_payload_with_prose(self) -> None:
        raw = "Here you go:\n```json\n" + json.dumps(VALID_PAYLOAD) + "\n```\nEnjoy!"
        result = parse_llm_response(raw)
        assert result.seo.keywords == ["chatbot"]

    def test_code_blocks_inside_content_survive(self) -> None:
        content = "# Setup\n\n```bash\npip install x\n```\n"
        raw = "```json\n" + json.dumps(dict(VALID_PAYLOAD, rewrittenContent=content)) + "\n```"
        result = parse_llm_response(raw)
        assert result.rewritten_content == content

    def test_optional_fields_may_be_absent(self) -> None:
        result = parse_llm_response('{"rewrittenContent": "Only the body"}')
        assert result.summary is None
        assert result.tags is None
        assert result.seo is None

    def test_competitor_gap_analysis(self) -> None:
        payload = dict(VALID_PAYLOAD, seo=dict(VALID_PAYLOAD["seo"], competitorGapAnalysis=["Pricing"]))
        result = parse_llm_response(json.dumps(payload))
        assert result.seo.competitor_gap_analysis == ["Pricing"]
        assert result.seo.to_document()["competitorGapAnalysis"] == ["Pricing"]

    def test_invalid_json_keeps_raw_text(self) -> None:
        raw = "I could not rewrite this article, sorry."
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_llm_response(raw)
        assert exc_info.value.raw_text == raw

    def test_missing_rewritten_content(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_llm_response('{"summary": "No body at all"}')

    def test_empty_rewritten_content(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_llm_response('{"rewrittenContent": ""}')

    def test_non_object_json(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_llm_response("[1, 2, 3]")


@pytest.mark.unit
class TestSeoAnalysis:
    """Test SeoAnalysis score coercion."""

    @pytest.mark.parametrize("raw,expected", [("85", 85), ("85%", 85), (84.6, 85), (150, 100), (-5, 0)])
    def test_score_coercion(self, raw, expected) -> None:
        assert SeoAnalysis(score=raw).score == expected

    def test_to_document_omits_absent_fields(self) -> None:
        document = SeoAnalysis(score=70).to_document()
        assert document == {"score": 70, "critique": [], "keywords": []}
