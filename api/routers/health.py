# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Description: health.py
# -----------------------------------------------------------------------------
import asyncio
import logging

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_health_service
from api.schemas.health import DeepHealthResponse, HealthResponse
from services.RetailHealthService import RetailHealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", message="Retail Chat API running")


@router.get("/deep", response_model=DeepHealthResponse)
async def deep_health_check(
    svc: RetailHealthService = Depends(get_health_service),
    run_llm_check: bool = Query(False, description="Also send a ping completion to the LLM"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (run_llm_check=%s)", run_llm_check)
    result = await asyncio.to_thread(svc.deep_health, run_llm_check)
    logger.info("GET /health/deep completed (status=%s)", result.status)
    return result
