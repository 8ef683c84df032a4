# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-12
# Description: errors.py
# -----------------------------------------------------------------------------


class RetailChatError(Exception):
    """Base class for errors raised by the retail chat assistant."""


class NotFoundError(RetailChatError):
    """Account (tenant) row is missing."""


class EmbeddingError(RetailChatError):
    """Embedding provider returned no vector."""


class UnknownToolError(RetailChatError):
    """The LLM requested a tool name outside the fixed vocabulary."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class UpstreamProviderError(RetailChatError):
    """LLM or embedding provider call failed."""


class ToolExecutionError(RetailChatError):
    """Any other failure while a tool handler was running."""
