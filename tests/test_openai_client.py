"""Tests for the OpenAI schedule suggestion client (no network)."""

import json
import pytest
from unittest.mock import MagicMock

import httpx
from openai import APIError

from dayweaver.exceptions import GenerationFailed
from dayweaver.integrations.openai_client import OpenAIClient, format_task_lines, strip_code_fence
from dayweaver.models.schedule import ScheduleRequestItem

from tests.fakes import make_chat_response


ITEMS = [
    ScheduleRequestItem(task="Write report", deadline="2099-01-01 12:00", priority="High"),
    ScheduleRequestItem(task="Water plants", deadline="2099-01-01 18:00", priority="Low", duration_estimate="10m"),
]

VALID_RESPONSE = {
    "schedule": [
        {
            "task": "Write report",
            "deadline": "2099-01-01 12:00",
            "priority": "High",
            "duration_estimate": "2h",
            "start_time": "09:00",
            "end_time": "11:00",
        }
    ],
    "notes": "Water the plants after lunch.",
}


def _client_returning(content: str) -> OpenAIClient:
    sdk = MagicMock()
    sdk.chat.completions.create.return_value = make_chat_response(content)
    return OpenAIClient(client=sdk)


class TestPromptHelpers:
    """Test prompt formatting helpers."""

    def test_format_task_lines(self):
        lines = format_task_lines(ITEMS).splitlines()
        assert lines[0] == "- Task: Write report, Deadline: 2099-01-01 12:00, Priority: High"
        assert lines[1].endswith("Duration Estimate: 10m")

    @pytest.mark.parametrize("raw", [
        '{"a": 1}',
        '```json\n{"a": 1}\n```',
        '```\n{"a": 1}\n```',
    ])
    def test_strip_code_fence(self, raw):
        assert json.loads(strip_code_fence(raw)) == {"a": 1}


class TestGenerateDailySchedule:
    """Test generate_daily_schedule() parsing and failures."""

    def test_parses_schedule(self):
        client = _client_returning(json.dumps(VALID_RESPONSE))

        suggestion = client.generate_daily_schedule(ITEMS)

        assert suggestion.schedule[0].task == "Write report"
        assert suggestion.schedule[0].start_time == "09:00"
        assert suggestion.notes == "Water the plants after lunch."

    def test_prompt_contains_tasks(self):
        client = _client_returning(json.dumps(VALID_RESPONSE))
        client.generate_daily_schedule(ITEMS)

        kwargs = client.client.chat.completions.create.call_args.kwargs
        prompt = kwargs["messages"][-1]["content"]
        assert "Write report" in prompt
        assert "Water plants" in prompt

    def test_accepts_fenced_json(self):
        client = _client_returning("```json\n" + json.dumps(VALID_RESPONSE) + "\n```")
        assert len(client.generate_daily_schedule(ITEMS).schedule) == 1

    def test_notes_only_is_accepted(self):
        client = _client_returning(json.dumps({"schedule": [], "notes": "Take a break."}))
        assert client.generate_daily_schedule(ITEMS).notes == "Take a break."

    @pytest.mark.parametrize("content", [
        "not json at all",
        json.dumps({"schedule": [{"task": "missing times"}]}),
        json.dumps({"schedule": [], "notes": "  "}),
        "",
    ])
    def test_unusable_output_raises(self, content):
        client = _client_returning(content)
        with pytest.raises(GenerationFailed):
            client.generate_daily_schedule(ITEMS)

    def test_api_error_raises_generation_failed(self):
        sdk = MagicMock()
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        sdk.chat.completions.create.side_effect = APIError("quota", request, body=None)
        client = OpenAIClient(client=sdk)

        with pytest.raises(GenerationFailed):
            client.generate_daily_schedule(ITEMS)

    def test_unexpected_error_raises_generation_failed(self):
        sdk = MagicMock()
        sdk.chat.completions.create.side_effect = RuntimeError("boom")
        with pytest.raises(GenerationFailed):
            OpenAIClient(client=sdk).generate_daily_schedule(ITEMS)

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        client = OpenAIClient()

        assert client.client is None
        with pytest.raises(GenerationFailed):
            client.generate_daily_schedule(ITEMS)

    def test_no_items(self):
        with pytest.raises(GenerationFailed):
            _client_returning(json.dumps(VALID_RESPONSE)).generate_daily_schedule([])
