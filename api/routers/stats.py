# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Description: stats.py
# -----------------------------------------------------------------------------
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_stats_service
from api.schemas.stats import RetailStatsResponse
from services.RetailStatsService import RetailStatsService
from utility.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/stats",
    tags=["stats"]
)


@router.get("", response_model=RetailStatsResponse)
async def get_retail_stats(
    svc: RetailStatsService = Depends(get_stats_service),
) -> RetailStatsResponse:
    logger.info("GET /stats called")
    try:
        stats = await asyncio.to_thread(svc.get_stats)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return RetailStatsResponse(**stats)
