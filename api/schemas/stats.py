# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Description: stats.py
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import BaseModel


class PriceRange(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class DateRange(BaseModel):
    min: Optional[str] = None
    max: Optional[str] = None


class RetailStatsResponse(BaseModel):
    totalProducts: int
    scannedProducts: int
    uniqueCountries: List[Optional[str]]
    uniqueCustomers: List[Optional[str]]
    uniqueStockCodes: List[Optional[str]]
    totalRevenue: float
    totalQuantity: int
    priceRange: PriceRange
    dateRange: DateRange
