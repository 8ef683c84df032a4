# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-30
# Description: test_open_ai_chat.py
# -----------------------------------------------------------------------------
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from chat.OpenAIChat import OpenAIChat
from utility.errors import UpstreamProviderError

CFG = SimpleNamespace(openai_api_key="sk-test", openai_base_url="", openai_chat_model="gpt-test")


class RecordingCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.params = None

    def create(self, **params):
        self.params = params
        if self.error:
            raise self.error
        return self.response


def _chat_with(completions: RecordingCompletions) -> OpenAIChat:
    chat = OpenAIChat(cfg=CFG)
    chat.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return chat


def test_requires_api_key_and_model():
    with pytest.raises(ValueError):
        OpenAIChat(cfg=SimpleNamespace(openai_api_key="", openai_chat_model="gpt-test"))
    with pytest.raises(ValueError):
        OpenAIChat(cfg=SimpleNamespace(openai_api_key="sk-test", openai_chat_model=""))


def test_chat_passes_tools_with_auto_choice():
    completions = RecordingCompletions(response="raw")
    chat = _chat_with(completions)

    out = chat.chat([{"role": "user", "content": "hi"}], tools=[{"type": "function"}])

    assert out == "raw"
    assert completions.params["model"] == "gpt-test"
    assert completions.params["tool_choice"] == "auto"
    assert completions.params["tools"] == [{"type": "function"}]


def test_chat_without_tools_omits_tool_params():
    completions = RecordingCompletions(response="raw")
    _chat_with(completions).chat([{"role": "user", "content": "hi"}])

    assert "tools" not in completions.params
    assert "tool_choice" not in completions.params


def test_chat_rejects_empty_messages():
    with pytest.raises(ValueError):
        _chat_with(RecordingCompletions()).chat([])


def test_provider_errors_are_wrapped():
    chat = _chat_with(RecordingCompletions(error=OpenAIError("boom")))

    with pytest.raises(UpstreamProviderError, match="boom"):
        chat.chat([{"role": "user", "content": "hi"}])
    assert chat.healthcheck() is False


def test_simple_chat_extracts_answer():
    response = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="OK"))],
        usage={"total_tokens": 3},
        model="gpt-test",
    )
    out = _chat_with(RecordingCompletions(response=response)).simple_chat("ping", system_text="be brief")

    assert out["answer"] == "OK"
    assert out["model"] == "gpt-test"
