"""Ollama HTTP client for generation, chat and model listing."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from article_pipeline.config.settings import settings
from article_pipeline.utils.exceptions import (
    ClientRequestError,
    LLMProviderError,
    RateLimitError,
)
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)

RATE_LIMIT_STATUS_CODES = {429, 503}
CLIENT_ERROR_STATUS_CODES = {400, 404, 422}
RATE_LIMIT_MARKERS = ("too many requests", "overloaded", "rate limit")
CLIENT_ERROR_MARKERS = ("not found", "invalid model", "unknown model")

# Model name fragments of embedding-only models
EMBEDDING_MARKERS = ("embed", "bge-", "minilm")


@dataclass(frozen=True)
class ModelInfo:
    """Model available on the provider."""

    name: str
    supports_generation: bool
    size: Optional[int] = None


def classify_provider_error(
    message: str,
    status_code: Optional[int] = None,
) -> LLMProviderError:
    """
    Map a provider failure to the retry class it belongs to.

    Args:
        message: Provider error message
        status_code: HTTP status code, if any

    Returns:
        RateLimitError, ClientRequestError or LLMProviderError
    """
    lowered = message.lower()
    if status_code in RATE_LIMIT_STATUS_CODES or any(marker in lowered for marker in RATE_LIMIT_MARKERS):
        return RateLimitError(message, status_code=status_code)
    if status_code in CLIENT_ERROR_STATUS_CODES or any(marker in lowered for marker in CLIENT_ERROR_MARKERS):
        return ClientRequestError(message, status_code=status_code)
    return LLMProviderError(message, status_code=status_code)


class OllamaClient:
    """Async client for the Ollama REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Ollama URL (default: settings.ollama_base_url)
            timeout: Per-request timeout in seconds (default: settings.llm_timeout_seconds)
            client: Shared httpx client, a short-lived client per call otherwise
        """
        self.base_url = (base_url if base_url is not None else settings.ollama_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.llm_timeout_seconds
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            if self._client is not None:
                response = await self._client.request(method, url, json=payload, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method, url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            try:
                detail = e.response.json().get("error") or e.response.text
            except ValueError:
                detail = e.response.text
            error = classify_provider_error(f"Ollama HTTP {status_code}: {detail}", status_code)
            logger.error(
                "Ollama API error",
                path=path,
                status_code=status_code,
                response_text=(detail or "")[:500],
                error_type=type(error).__name__,
            )
            raise error from e
        except httpx.TimeoutException as e:
            raise LLMProviderError(f"Ollama request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise LLMProviderError(f"Ollama request failed: {str(e)[:200]}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise LLMProviderError(f"Ollama returned non-JSON body: {response.text[:200]}") from e
        if isinstance(data, dict) and data.get("error"):
            raise classify_provider_error(str(data["error"]))
        return data

    async def generate(self, model: str, prompt: str, json_mode: bool = True) -> str:
        """
        Generate a completion.

        Args:
            model: Model identifier
            prompt: Prompt text
            json_mode: Ask the model for a JSON object

        Returns:
            Raw response text
        """
        payload: Dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "stream": False,
        }
        if json_mode:
            payload["format"] = "json"

        data = await self._request("POST", "/api/generate", payload)
        text = data.get("response", "")
        logger.debug("Ollama generation completed", model=model, response_length=len(text))
        return text

    async def chat(self, model: str, messages: List[Dict[str, str]]) -> str:
        """
        Run a chat completion.

        Args:
            model: Model identifier
            messages: Messages with role (system, user, assistant) and content

        Returns:
            Assistant reply text
        """
        data = await self._request(
            "POST",
            "/api/chat",
            {"model": model, "messages": messages, "stream": False},
        )
        message = data.get("message", {})
        return message.get("content", "") if isinstance(message, dict) else str(message)

    async def list_models(self) -> List[ModelInfo]:
        """List installed models, flagging those usable for structured generation."""
        data = await self._request("GET", "/api/tags")
        models = []
        for item in data.get("models", []):
            name = item.get("name") or item.get("model") or ""
            if not name:
                continue
            lowered = name.lower()
            models.append(
                ModelInfo(
                    name=name,
                    supports_generation=not any(marker in lowered for marker in EMBEDDING_MARKERS),
                    size=item.get("size"),
                )
            )
        return models
