"""Chat assistant backed by the LLM provider."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from article_pipeline.agents.base_agent import BaseAgent
from article_pipeline.agents.enrichment.llm_client import OllamaClient
from article_pipeline.config.settings import settings

GREETING = "Hello! I am Jarvis. I am ready to assist you with information about this project."
OFFLINE_REPLY = "I'm currently offline (no language model endpoint configured)."
ERROR_REPLY = "I encountered a processing error. Systems are slightly recalibrating."

# Chat roles accepted from callers, mapped to provider roles
ROLE_MAP = {"user": "user", "model": "assistant", "assistant": "assistant"}


@dataclass(frozen=True)
class ChatMessage:
    role: str
    text: str


class ChatAssistant(BaseAgent):
    """System-prompted conversational assistant."""

    def __init__(
        self,
        provider: Optional[OllamaClient] = None,
        model: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> None:
        super().__init__("chat")
        self.provider = provider or OllamaClient()
        self.model = model or (settings.llm_models[0] if settings.llm_models else None)
        self.system_prompt = system_prompt or settings.chat_system_prompt

    def build_messages(self, history: Sequence[ChatMessage], new_message: str) -> List[dict]:
        messages = [
            {"role": "system", "content": self.system_prompt},
            {"role": "assistant", "content": GREETING},
        ]
        for message in history:
            messages.append({"role": ROLE_MAP.get(message.role, "assistant"), "content": message.text})
        messages.append({"role": "user", "content": new_message})
        return messages

    async def chat(self, history: Sequence[ChatMessage], new_message: str) -> str:
        """
        Answer a user message.

        Never raises: provider failures return an apology reply.

        Args:
            history: Previous turns, oldest first
            new_message: User message

        Returns:
            Reply text
        """
        if not self.provider.is_configured or not self.model:
            return OFFLINE_REPLY

        messages = self.build_messages(history, new_message)
        try:
            reply = await self.provider.chat(self.model, messages)
        except Exception as e:
            self.logger.error("Chat failed", model=self.model, error_type=type(e).__name__, error=str(e))
            return ERROR_REPLY

        self.log_step("chat", "completed", "Reply generated", details={"turns": len(history) + 1})
        return reply
