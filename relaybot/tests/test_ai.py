"""
Tests for the completion bridge: reply extraction order, usage counting
and the echo fallback.
"""
from unittest.mock import AsyncMock, Mock

import pytest

from relaybot.core.ai import (
    CompletionBridge,
    TONE_INSTRUCTIONS,
    build_prompt,
    extract_reply,
    extract_tokens,
)
from relaybot.core.state import Tone
from relaybot.storage.analytics import RecordingEventLog


class FakeResponse:
    """Stands in for the SDK response object."""

    def __init__(self, data, output_text):
        self._data = data
        self.output_text = output_text

    def model_dump(self):
        return dict(self._data)


class TestReplyExtraction:
    def test_output_text_wins(self):
        data = {"output_text": "direct", "output": [{"content": [{"text": "nested"}]}]}
        assert extract_reply(data, "fallback") == "direct"

    def test_joins_segments_with_newlines(self):
        data = {"output": [
            {"type": "message", "content": [{"type": "output_text", "text": "Hello"}, {"type": "output_text", "text": " world"}]},
            {"type": "message", "content": [{"type": "output_text", "text": "Second"}]},
        ]}
        assert extract_reply(data, "fallback") == "Hello world\nSecond"

    def test_skips_reasoning_and_textless_parts(self):
        data = {"output": [
            {"type": "reasoning", "summary": [], "content": [{"type": "reasoning_text", "text": "thinking"}]},
            {"type": "message", "content": [{"type": "refusal", "refusal": "no"}, {"text": "Answer"}]},
        ]}
        assert extract_reply(data, "fallback") == "Answer"

    def test_empty_output_text_falls_through(self):
        data = {"output_text": "", "output": [{"content": [{"text": "nested"}]}]}
        assert extract_reply(data, "fallback") == "nested"

    @pytest.mark.parametrize("data", [{}, {"output": []}, {"output": None}, {"output": [{"content": None}]}])
    def test_falls_back_to_input(self, data):
        assert extract_reply(data, "fallback") == "fallback"


class TestUsage:
    def test_sums_input_and_output(self):
        assert extract_tokens({"usage": {"input_tokens": 12, "output_tokens": 30, "total_tokens": 42}}) == 42

    @pytest.mark.parametrize("data", [{}, {"usage": None}, {"usage": {}}, {"usage": {"input_tokens": None}}])
    def test_missing_usage_is_zero(self, data):
        assert extract_tokens(data) == 0

    def test_partial_usage(self):
        assert extract_tokens({"usage": {"output_tokens": 9}}) == 9


class TestPrompt:
    def test_friendly_is_untouched(self):
        assert build_prompt("hi", Tone.FRIENDLY) == "hi"

    @pytest.mark.parametrize("tone", [Tone.FORMAL, Tone.TECHNICAL])
    def test_other_tones_prefixed(self, tone):
        assert build_prompt("hi", tone) == f"{TONE_INSTRUCTIONS[tone]}\n\nhi"


class TestCompletionBridge:
    @pytest.fixture
    def client(self):
        client = Mock()
        client.responses.create = AsyncMock()
        return client

    @pytest.mark.asyncio
    async def test_sdk_response_object(self, client):
        client.responses.create.return_value = FakeResponse(
            {"output": [], "usage": {"input_tokens": 3, "output_tokens": 4}},
            output_text="from property",
        )
        bridge = CompletionBridge(client=client)

        result = await bridge.complete("hi")

        assert result.text == "from property"
        assert result.tokens == 7
        assert result.ok is True

    @pytest.mark.asyncio
    async def test_request_shape(self, client):
        client.responses.create.return_value = {"output_text": "ok"}
        bridge = CompletionBridge(model="test-model", max_output_tokens=123, client=client)

        await bridge.complete("question", Tone.TECHNICAL)

        client.responses.create.assert_awaited_once_with(
            model="test-model",
            input=f"{TONE_INSTRUCTIONS[Tone.TECHNICAL]}\n\nquestion",
            max_output_tokens=123,
        )

    @pytest.mark.asyncio
    async def test_failure_echoes_input(self, client):
        client.responses.create.side_effect = RuntimeError("boom")
        events = RecordingEventLog()
        bridge = CompletionBridge(client=client, events=events)

        result = await bridge.complete("echo me", chat_id=5)

        assert result.text == "echo me"
        assert result.tokens == 0
        assert result.ok is False
        assert events.events[0]["type"] == "completion_failed"
        assert events.events[0]["chat_id"] == 5

    @pytest.mark.asyncio
    async def test_unparseable_response_echoes_input(self, client):
        client.responses.create.return_value = object()
        bridge = CompletionBridge(client=client)

        result = await bridge.complete("echo me")

        assert result.text == "echo me"
        assert result.ok is False
