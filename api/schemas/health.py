# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-09-23
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    message: str


class SmokeTestSummary(BaseModel):
    total: int
    passed: int
    failed: int


class DeepHealthResponse(BaseModel):
    # ok | degraded (OpenAI missing, lexical search only) | error
    status: str
    results: Dict[str, bool] = Field(default_factory=dict)
    summary: SmokeTestSummary
    config: Optional[Dict[str, Any]] = None
