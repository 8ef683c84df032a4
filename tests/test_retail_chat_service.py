# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-29
# Description: test_retail_chat_service.py
# -----------------------------------------------------------------------------
import asyncio
import json
from types import SimpleNamespace

import pytest

from services.RetailChatService import SYSTEM_PROMPT, RetailChatService
from tools.ToolExecutor import ToolExecutor
from utility.errors import UpstreamProviderError


def _completion(content=None, tool_calls=None, usage=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=usage)


def _tool_call(call_id, name, arguments):
    return SimpleNamespace(id=call_id, function=SimpleNamespace(name=name, arguments=arguments))


class ScriptedChat:
    """Returns queued completions and records every request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def chat(self, messages, *, tools=None, tool_choice=None):
        self.requests.append({"messages": list(messages), "tools": tools, "tool_choice": tool_choice})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


USER_TURN = [{"role": "user", "content": "What sells best in France?"}]


def test_answer_without_tools(adapter):
    chat = ScriptedChat(_completion("Hello there", usage={"total_tokens": 12}))
    svc = RetailChatService(chat_client=chat, tool_executor=ToolExecutor(adapter))

    out = asyncio.run(svc.chat(USER_TURN))

    assert out == {"message": "Hello there", "toolResults": [], "usage": {"total_tokens": 12}}
    assert len(chat.requests) == 1

    request = chat.requests[0]
    assert request["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert request["messages"][1:] == USER_TURN
    assert request["tool_choice"] == "auto"
    assert len(request["tools"]) == 6


def test_tool_calls_are_executed_and_fed_back(adapter):
    first = _completion(
        content=None,
        tool_calls=[
            _tool_call("call_1", "get_products_by_country", '{"country": "France"}'),
            _tool_call("call_2", "not_a_tool", "{}"),
        ],
        usage={"total_tokens": 50},
    )
    final = _completion("France buys strawberry trinket boxes.", usage={"total_tokens": 80})
    chat = ScriptedChat(first, final)
    svc = RetailChatService(chat_client=chat, tool_executor=ToolExecutor(adapter))

    out = asyncio.run(svc.chat(USER_TURN))

    assert out["message"] == "France buys strawberry trinket boxes."
    assert out["usage"] == {"total_tokens": 80}
    assert [r["type"] for r in out["toolResults"]] == ["table", "text"]
    assert out["toolResults"][0]["title"] == "Products from France (2 found)"

    second = chat.requests[1]
    assert second["tools"] is None

    assistant, tool_1, tool_2 = second["messages"][-3:]
    assert assistant["role"] == "assistant"
    assert [tc["id"] for tc in assistant["tool_calls"]] == ["call_1", "call_2"]
    assert assistant["tool_calls"][0]["function"]["arguments"] == '{"country": "France"}'

    assert tool_1["role"] == "tool" and tool_1["tool_call_id"] == "call_1"
    assert len(json.loads(tool_1["content"])["products"]) == 2
    assert tool_2["tool_call_id"] == "call_2"
    assert "Unknown tool" in json.loads(tool_2["content"])["error"]


def test_usage_objects_are_dumped(adapter):
    usage = SimpleNamespace(model_dump=lambda: {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3})
    chat = ScriptedChat(_completion("ok", usage=usage))
    svc = RetailChatService(chat_client=chat, tool_executor=ToolExecutor(adapter))

    out = asyncio.run(svc.chat(USER_TURN))
    assert out["usage"] == {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}


def test_upstream_errors_propagate(adapter):
    chat = ScriptedChat(UpstreamProviderError("LLM request failed: boom"))
    svc = RetailChatService(chat_client=chat, tool_executor=ToolExecutor(adapter))

    with pytest.raises(UpstreamProviderError):
        asyncio.run(svc.chat(USER_TURN))
