# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-20
# Updated: 2026-10-05
# Description: RetailChatService.py
# -----------------------------------------------------------------------------
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from chat.OpenAIChat import Message, OpenAIChat
from tools.RetailToolCalls import ToolCall, ToolResult
from tools.RetailToolSchemas import openai_tool_specs
from tools.ToolExecutor import ToolExecutor
from utility.logging_utils import get_class_logger

SYSTEM_PROMPT = (
    "You are a helpful AI assistant for sales representatives and agents. "
    "You have access to a retail database with the following information:\n"
    "- Product records with stock codes, descriptions, prices, quantities\n"
    "- Customer information and purchase history\n"
    "- Sales data across different countries and time periods\n"
    "- Invoice dates and transaction details\n\n"
    "TOOL SELECTION GUIDELINES:\n"
    "- Use 'vector_search' for natural language queries, product descriptions, or when users ask for "
    "\"similar\" products, recommendations, or conceptual searches\n"
    "- Use 'search_products' for specific searches with multiple filters or constraints\n"
    "- Use 'get_products_by_country', 'get_price_range_products' and 'get_products_by_date_range' "
    "for targeted data retrieval\n"
    "- Use 'get_top_selling_products' for performance analysis\n\n"
    "RESPONSE GUIDELINES:\n"
    "- Always provide context and insights, not just raw data\n"
    "- Format numbers appropriately (currency, percentages, etc.)\n"
    "- Identify trends and patterns in the data\n"
    "- Make recommendations based on the data when appropriate\n"
    "- If results are large, summarize key findings first\n\n"
    "Use the appropriate tools to provide accurate, data-driven responses. "
    "Always be helpful and explain your findings clearly."
)


def _usage_dict(usage: Any) -> Optional[Dict[str, Any]]:
    if usage is None:
        return None
    if isinstance(usage, dict):
        return usage
    if hasattr(usage, "model_dump"):
        return usage.model_dump()
    return {
        "prompt_tokens": getattr(usage, "prompt_tokens", None),
        "completion_tokens": getattr(usage, "completion_tokens", None),
        "total_tokens": getattr(usage, "total_tokens", None),
    }


def _assistant_message(message: Any) -> Message:
    """Echo the assistant's tool-call turn back in request form."""
    return {
        "role": "assistant",
        "content": message.content or "",
        "tool_calls": [
            {
                "id": tc.id,
                "type": "function",
                "function": {"name": tc.function.name, "arguments": tc.function.arguments},
            }
            for tc in message.tool_calls
        ],
    }


class RetailChatService:
    """
    Chat Service:
        - asks the LLM for a completion with the retail tool schemas attached
        - runs any requested tools concurrently via ToolExecutor
        - asks the LLM again with the tool results for the final answer
        - returns {message, toolResults, usage}
    """

    def __init__(
            self,
            *,
            chat_client: OpenAIChat,
            tool_executor: ToolExecutor,
            system_prompt: str = SYSTEM_PROMPT,
            logger: logging.Logger | None = None,
    ) -> None:
        self.chat_client = chat_client
        self.tool_executor = tool_executor
        self.system_prompt = system_prompt
        self.logger = logger or get_class_logger(self.__class__)
        self.logger.info(
            "RetailChatService initialised (chat_client=%s tool_executor=%s)",
            type(self.chat_client).__name__,
            type(self.tool_executor).__name__,
        )

    async def chat(self, messages: Sequence[Message]) -> Dict[str, Any]:
        conversation: List[Message] = [{"role": "system", "content": self.system_prompt}, *messages]
        self.logger.info("chat: turns=%d (start)", len(messages))

        response = await asyncio.to_thread(
            self.chat_client.chat,
            conversation,
            tools=openai_tool_specs(),
            tool_choice="auto",
        )
        response_message = response.choices[0].message

        if not response_message.tool_calls:
            self.logger.info("chat: answered without tools (done)")
            return {
                "message": response_message.content,
                "toolResults": [],
                "usage": _usage_dict(response.usage),
            }

        tool_calls = [
            ToolCall(name=tc.function.name, parameters=tc.function.arguments, id=tc.id)
            for tc in response_message.tool_calls
        ]
        self.logger.info("chat: executing %d tool call(s): %s", len(tool_calls), [c.name for c in tool_calls])

        tool_results: List[ToolResult] = list(await asyncio.gather(
            *(asyncio.to_thread(self.tool_executor.execute_tool, call) for call in tool_calls)
        ))

        tool_messages: List[Message] = [
            {
                "role": "tool",
                "tool_call_id": result.tool_call_id,
                "content": json.dumps(result.result, default=str),
            }
            for result in tool_results
        ]

        final_response = await asyncio.to_thread(
            self.chat_client.chat,
            [*conversation, _assistant_message(response_message), *tool_messages],
        )
        answer = final_response.choices[0].message.content

        self.logger.info("chat: answer_chars=%d tool_results=%d (done)", len(answer or ""), len(tool_results))
        return {
            "message": answer,
            "toolResults": [r.display_data.to_dict() for r in tool_results if r.display_data],
            "usage": _usage_dict(final_response.usage),
        }
