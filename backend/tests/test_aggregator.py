# tests for the weekly aggregator — strict json shape, retries, graceful degradation

import pytest

from app.exceptions import CompletionError, MalformedSummary
from app.models.journal import JournalEntry
from app.services.aggregator import WeeklyAggregator, parse_summary, render_entries
from app.services.prompts import EMPTY_WEEK_MESSAGE, SUMMARY_UNAVAILABLE_MESSAGE
from tests.conftest import FakeCompletion

ENTRIES = [
    JournalEntry(date="2025-11-03", content="Busy day at work."),
    JournalEntry(date="2025-11-04", content="  Called mom.  "),
]


class TestRenderEntries:
    def test_date_and_content_in_order(self):
        assert render_entries(ENTRIES) == "2025-11-03: Busy day at work.\n2025-11-04: Called mom."


class TestParseSummary:
    def test_valid_shape(self):
        summary = parse_summary('{"noticed": [" a ", "b"], "focus": ["c", "d "]}', max_items=3)
        assert summary.noticed == ["a", "b"]
        assert summary.focus == ["c", "d"]
        assert summary.message is None

    def test_items_capped(self):
        summary = parse_summary('{"noticed": ["1", "2", "3", "4", "5"], "focus": []}', max_items=3)
        assert summary.noticed == ["1", "2", "3"]
        assert summary.focus == []

    def test_code_fence_tolerated(self):
        summary = parse_summary('```json\n{"noticed": ["a"], "focus": ["b"]}\n```', max_items=3)
        assert summary.noticed == ["a"]

    @pytest.mark.parametrize("text", [
        "",
        "not json",
        '{"noticed": ["a"]}',
        '{"noticed": "a", "focus": []}',
        '{"noticed": [1, 2], "focus": []}',
        '["a", "b"]',
        'Sure! {"noticed": [], "focus": []}',
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedSummary):
            parse_summary(text, max_items=3)


class TestSummarize:
    async def test_empty_week_skips_completion(self):
        fake = FakeCompletion()
        summary = await WeeklyAggregator(fake).summarize([])
        assert summary.noticed == []
        assert summary.focus == []
        assert summary.message == EMPTY_WEEK_MESSAGE
        assert fake.generate_calls == []

    async def test_valid_reply_returned_verbatim(self):
        fake = FakeCompletion(['{"noticed":["a","b"],"focus":["c","d"]}'])
        summary = await WeeklyAggregator(fake).summarize(ENTRIES)
        assert summary.noticed == ["a", "b"]
        assert summary.focus == ["c", "d"]
        assert len(fake.generate_calls) == 1
        assert "2025-11-03: Busy day at work." in fake.generate_calls[0]

    async def test_malformed_three_times_degrades(self):
        fake = FakeCompletion(["nope"])
        summary = await WeeklyAggregator(fake).summarize(ENTRIES)
        assert summary.noticed == []
        assert summary.focus == []
        assert summary.message == SUMMARY_UNAVAILABLE_MESSAGE
        assert len(fake.generate_calls) == 3

    async def test_recovers_after_bad_attempts(self):
        fake = FakeCompletion(["{", '{"noticed": []}', '{"noticed": ["x"], "focus": ["y"]}'])
        summary = await WeeklyAggregator(fake).summarize(ENTRIES)
        assert summary.noticed == ["x"]
        assert len(fake.generate_calls) == 3

    async def test_provider_errors_never_raise(self):
        class Broken(FakeCompletion):
            async def generate(self, prompt):
                self.generate_calls.append(prompt)
                raise CompletionError("timeout")

        fake = Broken()
        summary = await WeeklyAggregator(fake).summarize(ENTRIES)
        assert summary.message == SUMMARY_UNAVAILABLE_MESSAGE
        assert len(fake.generate_calls) == 3
