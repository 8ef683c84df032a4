# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Description: RetailStatsService.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict

from tools.ToolExecutor import ToolExecutor
from utility.logging_utils import get_class_logger


class RetailStatsService:
    """
    Stats service for the /stats endpoint.

    Shares the ToolExecutor's adapter so the index is initialised once
    under the same lock.
    """

    def __init__(self, *, tool_executor: ToolExecutor, logger: logging.Logger | None = None) -> None:
        self.tool_executor = tool_executor
        self.logger = logger or get_class_logger(self.__class__)

    def get_stats(self) -> Dict[str, Any]:
        self.tool_executor.initialize()
        stats = self.tool_executor.adapter.get_product_statistics()
        self.logger.info(
            "Stats for account='%s': total=%d scanned=%d",
            self.tool_executor.adapter.account_id,
            stats["totalProducts"],
            stats["scannedProducts"],
        )
        return stats
