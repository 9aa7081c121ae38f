# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-09-24
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from api.schemas.health import HealthResponse, DeepHealthResponse
from api.dependencies import get_health_service
from services.HealthService import HealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health_check():
    return HealthResponse(status="ok", message="Receipt smart search API running")


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
    svc: HealthService = Depends(get_health_service),
    run_live: bool = Query(False, description="Also call the embedding and chat APIs"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (run_live=%s)", run_live)
    try:
        result = svc.deep_health(run_live=run_live)
    except Exception as e:
        logger.exception("GET /health/deep failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Health check failed: {e}")

    logger.info("GET /health/deep completed: %s", result.status)
    return result
