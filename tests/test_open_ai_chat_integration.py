# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-30
# Description: test_open_ai_chat_integration.py
# -----------------------------------------------------------------------------
import asyncio
import os

import pytest

from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from services.RetailChatService import RetailChatService
from tools.ToolExecutor import ToolExecutor


def _missing_openai_chat_env_vars() -> list[str]:
    """Env var names derived from Config.ENV_VARS to avoid duplication."""
    return [name for name in Config.OPENAI_ENV_VARS if not os.getenv(name)]


def _skip_if_missing_prereqs():
    missing = _missing_openai_chat_env_vars()
    if missing:
        pytest.skip(f"Missing env vars for OpenAI: {', '.join(missing)}")


@pytest.mark.integration
def test_openai_chat_simple_roundtrip():
    _skip_if_missing_prereqs()

    chat = OpenAIChat(cfg=Config.from_env())
    resp = chat.simple_chat(
        user_text="Reply with a single word: OK",
        system_text="You are a test assistant.",
        temperature=0.0,
        max_tokens=5,
    )

    assert isinstance(resp, dict)
    assert resp["answer"].strip().upper().startswith("OK")


@pytest.mark.integration
def test_openai_chat_healthcheck():
    _skip_if_missing_prereqs()

    chat = OpenAIChat(cfg=Config.from_env())
    assert chat.healthcheck() is True


@pytest.mark.integration
def test_chat_service_uses_retail_tools(adapter):
    """Real LLM against the in-memory sample index."""
    _skip_if_missing_prereqs()

    svc = RetailChatService(
        chat_client=OpenAIChat(cfg=Config.from_env()),
        tool_executor=ToolExecutor(adapter),
    )
    out = asyncio.run(svc.chat([
        {"role": "user", "content": "Using the tools, list the products sold to customers in France."}
    ]))

    assert out["message"]
    assert any(r["type"] == "table" for r in out["toolResults"])
