"""API router for the chat assistant."""

from fastapi import APIRouter, Depends

from article_pipeline.agents.agent_chat import ChatAssistant, ChatMessage
from article_pipeline.api.dependencies import get_chat_assistant
from article_pipeline.api.schemas.requests import ChatRequest
from article_pipeline.api.schemas.responses import ChatResponse

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post(
    "",
    response_model=ChatResponse,
    summary="Chat with the assistant",
    description="Send a message with the previous turns. Provider failures return an apology reply, never an error.",
)
async def chat(
    request: ChatRequest,
    assistant: ChatAssistant = Depends(get_chat_assistant),
) -> ChatResponse:
    history = [ChatMessage(role=message.role, text=message.text) for message in request.messages]
    reply = await assistant.chat(history, request.new_message)
    return ChatResponse(reply=reply)
