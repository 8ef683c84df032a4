# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Updated: 2026-10-18
# Description: RetailHealthService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from api.schemas.health import DeepHealthResponse, SmokeTestSummary
from chat.OpenAIChat import OpenAIChat
from persistence.RetailDatabase import RetailDatabase
from tools.ToolExecutor import ToolExecutor
from utility.logging_utils import get_class_logger


@dataclass
class RetailHealthService:
    """
    Smoke tests for the components a chat request depends on.
    Returns DeepHealthResponse for API layer
    """

    database: RetailDatabase
    tool_executor: ToolExecutor
    chat_client: Optional[OpenAIChat] = None
    logger: logging.Logger = field(default=None)

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def _search_index_ok(self) -> bool:
        try:
            self.tool_executor.initialize()
            return True
        except Exception as e:
            self.logger.warning("Search index check failed: %s", e)
            return False

    def run_all(self, run_llm_check: bool = False) -> Dict[str, bool]:
        results = {
            "database": self.database.test_connection(),
            "search_index": self._search_index_ok(),
        }
        if run_llm_check:
            results["openai"] = self.chat_client.healthcheck() if self.chat_client else False
        self.logger.info("Health checks: %s", results)
        return results

    def deep_health(self, run_llm_check: bool = False) -> DeepHealthResponse:
        results = self.run_all(run_llm_check=run_llm_check)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed_checks = [name for name, ok in results.items() if not ok]
        adapter = self.tool_executor.adapter

        return DeepHealthResponse(
            status="ok" if not failed_checks else "error",
            account_id=adapter.account_id,
            indexed_documents=adapter.index.count if adapter.is_initialized else None,
            results=results,
            summary=SmokeTestSummary(
                total=total,
                passed=passed,
                failed=len(failed_checks),
                failed_checks=failed_checks,
            ),
        )
