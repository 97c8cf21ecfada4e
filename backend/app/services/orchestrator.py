# conversation orchestrator — turns a mode + message history into one reply
#
# pipeline per exchange:
#   1. pick the mode's behavioral script, append optional context after a delimiter
#   2. check the history ends with the user's turn
#   3. drop blank turns and any assistant turns before the first user turn
#   4. call the completion service, retrying blank replies up to COMPLETION_MAX_ATTEMPTS
#
# elaborate() is the lighter journal mode: one-shot prompt, same retry budget,
# but degrades to a fixed phrase instead of failing.

import logging
from typing import Optional

from app.config import settings
from app.exceptions import EmptyCompletion, InvalidHistory, ValidationError
from app.models.message import Message
from app.services.completion import CompletionService, Turn
from app.services.prompts import CONTEXT_DELIMITER, ELABORATE_FALLBACK, SYSTEM_PROMPTS
from app.services.retry import RetriesExhausted, attempt, non_empty_text

logger = logging.getLogger(__name__)


def build_system_instruction(mode: str, context: Optional[str] = None) -> str:
    """mode script, plus context after the delimiter when there is any"""
    try:
        script = SYSTEM_PROMPTS[mode]
    except KeyError:
        raise ValidationError(f"Unknown mode: {mode}")
    if context and context.strip():
        return f"{script}{CONTEXT_DELIMITER}{context}"
    return script


def sanitize_history(messages: list[Message]) -> list[Message]:
    """drop blank turns, then leading assistant turns (the exchange must open on the user side)"""
    kept = [m for m in messages if not m.is_blank]
    start = 0
    while start < len(kept) and kept[start].role == "assistant":
        start += 1
    return kept[start:]


def to_turns(messages: list[Message]) -> list[Turn]:
    return [Turn(role="model" if m.role == "assistant" else "user", text=m.content) for m in messages]


class ConversationOrchestrator:
    """sole caller of the completion service for vent and mentor exchanges"""

    def __init__(self, completion: CompletionService, max_attempts: Optional[int] = None):
        self.completion = completion
        self.max_attempts = max_attempts or settings.COMPLETION_MAX_ATTEMPTS

    async def converse(
        self,
        mode: str,
        history: list[Message],
        new_user_message: str,
        context: Optional[str] = None,
    ) -> str:
        """append the new user message to history and get the assistant's reply"""
        messages = [*history, Message(role="user", content=new_user_message)]
        return await self.complete(mode, messages, context)

    async def complete(self, mode: str, messages: list[Message], context: Optional[str] = None) -> str:
        """reply to a conversation whose last entry is the user's turn"""
        if not messages or messages[-1].role != "user":
            raise InvalidHistory("Last message must be from user")

        system_instruction = build_system_instruction(mode, context)

        sanitized = sanitize_history(messages)
        if not sanitized or sanitized[-1] is not messages[-1]:
            raise InvalidHistory("Last user message is empty")

        history = to_turns(sanitized[:-1])
        new_message = sanitized[-1].content
        dropped = len(messages) - len(sanitized)
        if dropped:
            logger.info(f"Dropped {dropped} blank or leading assistant messages from {mode} history")

        async def call() -> str:
            return await self.completion.chat(system_instruction, history, new_message)

        try:
            reply = await attempt(call, self.max_attempts, non_empty_text, label=f"{mode} completion")
        except RetriesExhausted:
            logger.error(f"{mode} completion returned empty text {self.max_attempts} times")
            raise EmptyCompletion()
        return reply.strip()

    async def elaborate(self, free_text: str) -> str:
        """ask the user to expand on a journal entry; never fails on blank replies"""
        if not free_text or not free_text.strip():
            raise ValidationError("content is required")

        prompt = f"{SYSTEM_PROMPTS['journal']}{CONTEXT_DELIMITER}{free_text}"

        async def call() -> str:
            return await self.completion.generate(prompt)

        try:
            reply = await attempt(call, self.max_attempts, non_empty_text, label="journal elaboration")
        except RetriesExhausted:
            logger.warning("Journal elaboration returned empty text on every attempt, using fallback")
            return ELABORATE_FALLBACK
        return reply.strip()
