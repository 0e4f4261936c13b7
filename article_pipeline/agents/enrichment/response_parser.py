"""Parsing and validation of the LLM enrichment JSON contract."""

import json
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from article_pipeline.utils.exceptions import MalformedResponseError
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)

# Only a fence wrapping the whole reply; fences inside string values are content
_FENCE_WRAPPER_RE = re.compile(r"^\s*```(?:json|JSON)?[ \t]*\n(.*?)\n?[ \t]*```\s*$", re.DOTALL)


class SeoAnalysis(BaseModel):
    """SEO analysis returned by the model."""

    score: int = Field(..., ge=0, le=100)
    readability: Optional[str] = None
    critique: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    competitor_gap_analysis: Optional[List[str]] = Field(default=None, alias="competitorGapAnalysis")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().rstrip("%")
        try:
            number = round(float(value))
        except (TypeError, ValueError):
            return value
        return max(0, min(100, number))

    def to_document(self) -> Dict[str, Any]:
        """Serialize for the seo_analysis column, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EnrichmentResult(BaseModel):
    """Structured rewrite result."""

    summary: Optional[str] = None
    tags: Optional[List[str]] = None
    rewritten_content: str = Field(..., min_length=1, alias="rewrittenContent")
    seo: Optional[SeoAnalysis] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def extract_json_text(raw_text: str) -> str:
    """
    Strip a wrapping Markdown code fence and surrounding prose from model output.

    Returns:
        Text between the first '{' and the last '}', or the stripped text
        when no such span exists
    """
    text = (raw_text or "").strip()
    wrapped = _FENCE_WRAPPER_RE.match(text)
    if wrapped:
        text = wrapped.group(1).strip()
    first_open = text.find("{")
    last_close = text.rfind("}")
    if first_open != -1 and last_close > first_open:
        text = text[first_open : last_close + 1]
    return text


def parse_llm_response(raw_text: str) -> EnrichmentResult:
    """
    Parse model output into an EnrichmentResult.

    Args:
        raw_text: Raw model output

    Returns:
        Validated EnrichmentResult

    Raises:
        MalformedResponseError: If no valid JSON object matching the contract is found
    """
    json_text = extract_json_text(raw_text)
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error("JSON parse failure", error=str(e), raw_preview=(raw_text or "")[:500])
        raise MalformedResponseError(f"Invalid JSON response from model: {e}", raw_text=raw_text) from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Model response is not a JSON object", raw_text=raw_text)

    try:
        return EnrichmentResult.model_validate(data)
    except ValidationError as e:
        logger.error("Response does not match enrichment contract", errors=e.error_count())
        raise MalformedResponseError(f"Response does not match enrichment contract: {e}", raw_text=raw_text) from e
