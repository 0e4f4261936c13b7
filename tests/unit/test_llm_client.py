"""Unit tests for the Ollama client."""

import json

import httpx
import pytest

from article_pipeline.agents.enrichment.llm_client import OllamaClient, classify_provider_error
from article_pipeline.utils.exceptions import ClientRequestError, LLMProviderError, RateLimitError


def _client(handler) -> OllamaClient:
    transport = httpx.MockTransport(handler)
    return OllamaClient(base_url="http://ollama.test/", timeout=1.0, client=httpx.AsyncClient(transport=transport))


@pytest.mark.unit
class TestClassifyProviderError:
    """Test classify_provider_error function."""

    @pytest.mark.parametrize(
        "message,status_code,expected",
        [
            ("slow down", 429, RateLimitError),
            ("service unavailable", 503, RateLimitError),
            ("Too Many Requests", None, RateLimitError),
            ("server overloaded", 500, RateLimitError),
            ("bad request", 400, ClientRequestError),
            ("model 'x' not found", None, ClientRequestError),
            ("internal error", 500, LLMProviderError),
        ],
    )
    def test_classification(self, message, status_code, expected) -> None:
        error = classify_provider_error(message, status_code)
        assert type(error) is expected
        assert error.status_code == status_code


@pytest.mark.unit
@pytest.mark.asyncio
async def test_generate_sends_json_format() -> None:
    """Test generate payload and response extraction."""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["payload"] = json.loads(request.content)
        return httpx.Response(200, json={"response": '{"rewrittenContent": "x"}'})

    text = await _client(handler).generate("llama3.1:8b", "Rewrite this")

    assert text == '{"rewrittenContent": "x"}'
    assert captured["path"] == "/api/generate"
    assert captured["payload"] == {
        "model": "llama3.1:8b",
        "prompt": "Rewrite this",
        "stream": False,
        "format": "json",
    }


@pytest.mark.unit
@pytest.mark.asyncio
async def test_http_error_is_classified() -> None:
    """Test that HTTP errors become classified provider errors."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "model 'ghost' not found"})

    with pytest.raises(ClientRequestError) as exc_info:
        await _client(handler).generate("ghost", "prompt")

    assert exc_info.value.status_code == 404
    assert "not found" in str(exc_info.value)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_error_payload_with_success_status() -> None:
    """Test that an error field in a 200 body is raised."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "server overloaded, retry later"})

    with pytest.raises(RateLimitError):
        await _client(handler).generate("llama3.1:8b", "prompt")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connection_failure() -> None:
    """Test that transport failures raise LLMProviderError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(LLMProviderError):
        await _client(handler).generate("llama3.1:8b", "prompt")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_chat_returns_message_content() -> None:
    """Test chat response extraction."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/chat"
        return httpx.Response(200, json={"message": {"role": "assistant", "content": "Hello!"}})

    reply = await _client(handler).chat("llama3.1:8b", [{"role": "user", "content": "Hi"}])

    assert reply == "Hello!"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_models_flags_embedding_models() -> None:
    """Test model listing and generation capability detection."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "models": [
                    {"name": "llama3.1:8b", "size": 4_900_000_000},
                    {"name": "nomic-embed-text:latest", "size": 270_000_000},
                    {"name": ""},
                ]
            },
        )

    models = await _client(handler).list_models()

    assert [(model.name, model.supports_generation) for model in models] == [
        ("llama3.1:8b", True),
        ("nomic-embed-text:latest", False),
    ]
    assert models[0].size == 4_900_000_000
