# weekly aggregator — reduces a week's journal entries to {noticed[], focus[]}
# one completion call per attempt; output must be strict json of the expected
# shape. never raises: exhaustion and provider errors become an empty summary
# with an explanatory message.

import json
import logging
import re
from typing import Optional

from app.config import settings
from app.exceptions import CompletionError, MalformedSummary
from app.models.journal import JournalEntry, WeeklySummary
from app.services.completion import CompletionService
from app.services.prompts import EMPTY_WEEK_MESSAGE, SUMMARY_PROMPT, SUMMARY_UNAVAILABLE_MESSAGE
from app.services.retry import RetriesExhausted, attempt

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL)


def render_entries(entries: list[JournalEntry]) -> str:
    """date + content per entry, newline-delimited, order preserved"""
    return "\n".join(f"{entry.date}: {entry.content.strip()}" for entry in entries)


def parse_summary(text: str, max_items: int) -> WeeklySummary:
    """parse model output into a summary. a single surrounding code fence is
    tolerated; anything else that isn't the exact shape raises MalformedSummary."""
    raw = (text or "").strip()
    fenced = _FENCE.match(raw)
    if fenced:
        raw = fenced.group(1).strip()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedSummary(f"Summary is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise MalformedSummary("Summary is not a JSON object")

    fields = {}
    for key in ("noticed", "focus"):
        items = data.get(key)
        if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
            raise MalformedSummary(f"Summary field '{key}' must be an array of strings")
        trimmed = [item.strip() for item in items]
        fields[key] = [item for item in trimmed if item][:max_items]

    return WeeklySummary(**fields)


class WeeklyAggregator:
    def __init__(
        self,
        completion: CompletionService,
        max_attempts: Optional[int] = None,
        max_items: Optional[int] = None,
    ):
        self.completion = completion
        self.max_attempts = max_attempts or settings.COMPLETION_MAX_ATTEMPTS
        self.max_items = max_items or settings.SUMMARY_MAX_ITEMS

    async def summarize(self, entries: list[JournalEntry]) -> WeeklySummary:
        if not entries:
            return WeeklySummary(message=EMPTY_WEEK_MESSAGE)

        prompt = SUMMARY_PROMPT.format(max_items=self.max_items, entries=render_entries(entries))

        async def call() -> Optional[WeeklySummary]:
            try:
                text = await self.completion.generate(prompt)
                return parse_summary(text, self.max_items)
            except MalformedSummary as e:
                logger.warning(f"Discarding weekly summary attempt: {e.message}")
            except CompletionError as e:
                logger.warning(f"Weekly summary completion failed: {e.message}")
            return None

        try:
            return await attempt(
                call, self.max_attempts, lambda summary: summary is not None, label="weekly summary",
            )
        except RetriesExhausted:
            logger.error(f"Weekly summary unavailable after {self.max_attempts} attempts")
            return WeeklySummary(message=SUMMARY_UNAVAILABLE_MESSAGE)
