"""Unit tests for model fallback and retry classification."""

import json
from typing import Dict, List

import pytest

from article_pipeline.agents.enrichment.config import EnrichmentConfig
from article_pipeline.agents.enrichment.generation_engine import GenerationEngine
from article_pipeline.utils.exceptions import (
    ClientRequestError,
    GenerationError,
    LLMProviderError,
    MalformedResponseError,
    RateLimitError,
)

VALID_RESPONSE = json.dumps({"summary": "S.", "tags": ["t"], "rewrittenContent": "Body", "seo": {"score": 70}})


class ScriptedProvider:
    """Provider returning scripted outcomes per model, in call order."""

    def __init__(self, script: Dict[str, List[object]]) -> None:
        self.script = {model: list(outcomes) for model, outcomes in script.items()}
        self.calls: List[str] = []

    async def generate(self, model: str, prompt: str, json_mode: bool = True) -> str:
        self.calls.append(model)
        outcome = self.script[model].pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def _engine(provider: ScriptedProvider, sleep: RecordingSleep) -> GenerationEngine:
    config = EnrichmentConfig(models=["model-a", "model-b"])
    return GenerationEngine(provider, config=config, sleep=sleep)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_rate_limit_backs_off_linearly_then_succeeds() -> None:
    """Test two rate-limit failures then success on the same model."""
    provider = ScriptedProvider(
        {
            "model-a": [RateLimitError("429"), RateLimitError("429"), VALID_RESPONSE],
            "model-b": [VALID_RESPONSE],
        }
    )
    sleep = RecordingSleep()

    result = await _engine(provider, sleep).generate("prompt")

    assert result.rewritten_content == "Body"
    assert sleep.delays == [3.0, 6.0]
    assert provider.calls == ["model-a", "model-a", "model-a"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_client_error_moves_to_next_model_immediately() -> None:
    """Test that a client error is not retried on the same model."""
    provider = ScriptedProvider(
        {
            "model-a": [ClientRequestError("model not found", status_code=404)],
            "model-b": [VALID_RESPONSE],
        }
    )
    sleep = RecordingSleep()

    text = await _engine(provider, sleep).generate_text("prompt")

    assert text == VALID_RESPONSE
    assert provider.calls == ["model-a", "model-b"]
    assert sleep.delays == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_other_errors_wait_fixed_delay() -> None:
    """Test fixed delay for unclassified provider errors."""
    provider = ScriptedProvider(
        {
            "model-a": [LLMProviderError("boom"), VALID_RESPONSE],
            "model-b": [],
        }
    )
    sleep = RecordingSleep()

    await _engine(provider, sleep).generate_text("prompt")

    assert sleep.delays == [1.0]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_exhaustion_raises_generation_error() -> None:
    """Test that exhausting every model raises GenerationError."""
    provider = ScriptedProvider(
        {
            "model-a": [LLMProviderError("a1"), LLMProviderError("a2"), LLMProviderError("a3")],
            "model-b": [RateLimitError("b1"), RateLimitError("b2"), RateLimitError("b3")],
        }
    )
    sleep = RecordingSleep()

    with pytest.raises(GenerationError) as exc_info:
        await _engine(provider, sleep).generate("prompt")

    assert exc_info.value.attempts == 6
    assert isinstance(exc_info.value.__cause__, RateLimitError)
    assert sleep.delays == [1.0, 1.0, 3.0, 6.0]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_explicit_models_override_config() -> None:
    """Test that a per-call model list replaces the configured one."""
    provider = ScriptedProvider({"model-c": [VALID_RESPONSE]})

    await _engine(provider, RecordingSleep()).generate_text("prompt", models=["model-c"])

    assert provider.calls == ["model-c"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_empty_model_list() -> None:
    """Test that no configured models is a generation error."""
    with pytest.raises(GenerationError):
        await _engine(ScriptedProvider({}), RecordingSleep()).generate_text("prompt", models=[])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_malformed_output_is_not_retried() -> None:
    """Test that parsing failures surface without another attempt."""
    provider = ScriptedProvider({"model-a": ["not json at all"], "model-b": [VALID_RESPONSE]})

    with pytest.raises(MalformedResponseError):
        await _engine(provider, RecordingSleep()).generate("prompt")

    assert provider.calls == ["model-a"]
