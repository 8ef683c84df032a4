# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Updated: 2026-10-18
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

HealthStatus = Literal["ok", "error"]


class HealthResponse(BaseModel):
    status: HealthStatus
    message: str


class SmokeTestSummary(BaseModel):
    total: int
    passed: int
    failed: int
    failed_checks: List[str] = Field(default_factory=list)


class DeepHealthResponse(BaseModel):
    """Per-check results for the tenant the service answers for."""

    status: HealthStatus
    account_id: str
    indexed_documents: Optional[int] = Field(
        default=None, description="Documents in the tenant index; None when the index is not loaded"
    )
    results: Dict[str, bool]
    summary: SmokeTestSummary
