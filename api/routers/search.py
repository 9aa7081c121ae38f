# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-09-24
# Description: search router
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_search_service
from api.schemas.search import SearchRequest, SearchResponse
from common.Errors import ConfigurationError
from services.SmartSearchOrchestrator import SmartSearchOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
def post_search(
    req: SearchRequest,
    svc: SmartSearchOrchestrator = Depends(get_search_service),
) -> SearchResponse:
    query_text = (req.query or "").strip()

    try:
        data = svc.search(
            query_text,
            req.owner_id,
            limit=req.limit,
            threshold=req.threshold,
        )
    except ConfigurationError as e:
        logger.error("Search unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("Search failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Search failed: {e}")

    return SearchResponse.from_data(query_text, data)
