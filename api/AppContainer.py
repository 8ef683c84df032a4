# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.RetailEmbedder import RetailEmbedder
from persistence.RetailDatabase import RetailDatabase
from searchindex.RetailIndexAdapter import RetailIndexAdapter
from services.RetailChatService import RetailChatService
from services.RetailHealthService import RetailHealthService
from services.RetailStatsService import RetailStatsService
from tools.ToolExecutor import ToolExecutor


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()

        # Relational store (accounts + retail records)
        self.database = RetailDatabase(self.cfg.database_url)
        self.database.create_all()

        # Search
        self.embedder = RetailEmbedder(cfg=self.cfg)
        self.adapter = RetailIndexAdapter(
            self.cfg.account_id,
            database=self.database,
            embedder=self.embedder,
        )
        self.tool_executor = ToolExecutor(self.adapter)

        # LLM
        self.openai_chat = OpenAIChat(cfg=self.cfg)

        self.chat_service = RetailChatService(
            chat_client=self.openai_chat,
            tool_executor=self.tool_executor,
        )
        self.stats_service = RetailStatsService(tool_executor=self.tool_executor)
        self.health_service = RetailHealthService(
            database=self.database,
            tool_executor=self.tool_executor,
            chat_client=self.openai_chat,
        )


@lru_cache
def get_container() -> AppContainer:
    return AppContainer()
