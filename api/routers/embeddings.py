# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-24
# Description: embeddings router (coverage status + backfill)
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_indexer
from api.schemas.embeddings import BackfillRequest, BackfillResponse, EmbeddingStatusResponse
from common.Errors import ConfigurationError
from services.EmbeddingIndexer import EmbeddingIndexer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/embeddings", tags=["embeddings"])


@router.get("/status", response_model=EmbeddingStatusResponse)
def get_status(
    owner_id: str = Query(..., min_length=1),
    indexer: EmbeddingIndexer = Depends(get_indexer),
) -> EmbeddingStatusResponse:
    try:
        status = indexer.check_status(owner_id)
    except Exception as e:
        logger.exception("Embedding status failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Embedding status failed: {e}")

    return EmbeddingStatusResponse.from_status(owner_id, status)


@router.post("/backfill", response_model=BackfillResponse)
def post_backfill(
    req: BackfillRequest,
    indexer: EmbeddingIndexer = Depends(get_indexer),
) -> BackfillResponse:
    logger.info("POST /embeddings/backfill called (owner=%s batch=%s)", req.owner_id, req.batch_size)
    try:
        result = indexer.backfill(req.owner_id, req.batch_size)
    except ConfigurationError as e:
        logger.error("Backfill unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Backfill failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Backfill failed: {e}")

    return BackfillResponse.from_result(req.owner_id, result)
