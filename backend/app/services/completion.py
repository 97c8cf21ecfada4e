# completion service — the only boundary to the text-generation provider
# CompletionService is the contract the orchestrator and aggregator depend on;
# GeminiCompletionService implements it with langchain + gemini

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_google_genai import ChatGoogleGenerativeAI

from app.config import settings
from app.exceptions import CompletionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Turn:
    """one history entry as the provider sees it"""
    role: Literal["user", "model"]
    text: str


class CompletionService(Protocol):
    async def chat(self, system_instruction: str, history: list[Turn], new_message: str) -> str:
        """multi-turn completion: system script + prior turns + the new user message"""
        ...

    async def generate(self, prompt: str) -> str:
        """one-shot completion"""
        ...


def get_llm(temperature: float, max_output_tokens: Optional[int] = None) -> ChatGoogleGenerativeAI:
    """create a gemini llm instance"""
    kwargs = {}
    if max_output_tokens is not None:
        kwargs["max_output_tokens"] = max_output_tokens
    return ChatGoogleGenerativeAI(
        model=settings.GEMINI_MODEL,
        google_api_key=settings.GEMINI_API_KEY,
        temperature=temperature,
        **kwargs,
    )


def to_langchain_messages(system_instruction: str, history: list[Turn], new_message: str) -> list[BaseMessage]:
    messages: list[BaseMessage] = [SystemMessage(content=system_instruction)]
    for turn in history:
        if turn.role == "model":
            messages.append(AIMessage(content=turn.text))
        else:
            messages.append(HumanMessage(content=turn.text))
    messages.append(HumanMessage(content=new_message))
    return messages


class GeminiCompletionService:
    """gemini-backed completion via langchain chains"""

    def __init__(self):
        self._chat_chain = get_llm(
            settings.CHAT_TEMPERATURE, settings.CHAT_MAX_OUTPUT_TOKENS,
        ) | StrOutputParser()
        self._oneshot_chain = get_llm(settings.SUMMARY_TEMPERATURE) | StrOutputParser()

    async def chat(self, system_instruction: str, history: list[Turn], new_message: str) -> str:
        messages = to_langchain_messages(system_instruction, history, new_message)
        try:
            return await self._chat_chain.ainvoke(messages)
        except Exception as e:
            logger.error(f"Gemini chat completion failed: {e}")
            raise CompletionError(f"Completion service error: {e}") from e

    async def generate(self, prompt: str) -> str:
        try:
            return await self._oneshot_chain.ainvoke(prompt)
        except Exception as e:
            logger.error(f"Gemini one-shot completion failed: {e}")
            raise CompletionError(f"Completion service error: {e}") from e


# singleton client (created on first use)
_completion_service: Optional[GeminiCompletionService] = None


def get_completion_client() -> GeminiCompletionService:
    global _completion_service
    if _completion_service is None:
        logger.info(f"Initializing completion service with model: {settings.GEMINI_MODEL}")
        _completion_service = GeminiCompletionService()
    return _completion_service
