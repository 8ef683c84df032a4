# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Description: dependencies.py
# -----------------------------------------------------------------------------
from api.AppContainer import get_container
from config.Config import Config
from services.RetailChatService import RetailChatService
from services.RetailHealthService import RetailHealthService
from services.RetailStatsService import RetailStatsService


def get_cfg() -> Config:
    return get_container().cfg


def get_chat_service() -> RetailChatService:
    # use the singleton service from the container
    return get_container().chat_service


def get_stats_service() -> RetailStatsService:
    return get_container().stats_service


def get_health_service() -> RetailHealthService:
    return get_container().health_service
