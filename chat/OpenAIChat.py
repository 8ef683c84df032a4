# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-19
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

import settings
from utility.errors import UpstreamProviderError
from utility.logging_utils import get_class_logger

# {"role": "system"|"user"|"assistant"|"tool", "content": "...", ...}
Message = Dict[str, Any]


@dataclass
class OpenAIChat:
    """
        OpenAI chat-completions wrapper with tool calling.

        Expected Config fields:
          cfg.openai_api_key: str
          cfg.openai_base_url: str (blank for the SDK default)
          cfg.openai_chat_model: str
    """

    cfg: Any
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if not getattr(self.cfg, "openai_api_key", None):
            raise ValueError("Config is missing openai_api_key")

        self.model = getattr(self.cfg, "openai_chat_model", None)
        if not self.model:
            raise ValueError("Config missing openai_chat_model")

        self.client = OpenAI(
            api_key=self.cfg.openai_api_key,
            base_url=getattr(self.cfg, "openai_base_url", None) or None,
        )

        self.logger.info("OpenAIChat initialised (model=%s)", self.model)

    def chat(
            self,
            messages: List[Message],
            *,
            tools: Optional[List[Dict[str, Any]]] = None,
            tool_choice: Optional[str] = None,
            temperature: float = settings.CHAT_TEMPERATURE,
            max_tokens: int = settings.CHAT_MAX_TOKENS,
            extra_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Returns the full ChatCompletion (callers need tool_calls and usage)."""
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if tools:
            params["tools"] = tools
            params["tool_choice"] = tool_choice or "auto"
        if extra_params:
            params.update(extra_params)

        self.logger.debug(
            "Chat request: model=%s messages=%d tools=%d temp=%s max_tokens=%s",
            self.model, len(messages), len(tools or []), temperature, max_tokens
        )

        try:
            resp = self.client.chat.completions.create(**params)
        except OpenAIError as e:
            self.logger.error("Chat completion failed: %s", e)
            raise UpstreamProviderError(f"LLM request failed: {e}") from e

        self.logger.debug("Raw ChatCompletion response: %r", resp)
        return resp

    def simple_chat(
            self,
            user_text: str,
            system_text: Optional[str] = None,
            **kwargs: Any,
    ) -> dict:
        messages: List[Message] = []
        if system_text:
            messages.append({"role": "system", "content": system_text})
        messages.append({"role": "user", "content": user_text})

        resp = self.chat(messages, **kwargs)

        try:
            content = resp.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            raise UpstreamProviderError(f"Unexpected chat response format: {e}") from e

        self.logger.info("Chat answer generated (model=%s)", getattr(resp, "model", None))
        self.logger.debug("Token usage: %r", getattr(resp, "usage", None))

        return {
            "answer": content,
            "raw": resp,
            "usage": getattr(resp, "usage", None),
            "model": getattr(resp, "model", None),
        }

    def healthcheck(self) -> bool:
        try:
            _ = self.simple_chat("ping", max_tokens=5, temperature=0.0)
            return True
        except UpstreamProviderError as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
