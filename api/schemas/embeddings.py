# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-24
# Description: embeddings.py
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import BaseModel, Field

from receipt.types import BackfillResult, EmbeddingJobOutcome, EmbeddingStatus


class EmbeddingStatusResponse(BaseModel):
    owner_id: str
    total: int
    with_embedding: int
    without_embedding: int
    no_content: int = 0
    percentage_complete: float

    @classmethod
    def from_status(cls, owner_id: str, status: EmbeddingStatus) -> "EmbeddingStatusResponse":
        return cls(
            owner_id=owner_id,
            total=status.total,
            with_embedding=status.with_embedding,
            without_embedding=status.without_embedding,
            no_content=status.no_content,
            percentage_complete=status.percentage_complete,
        )


class BackfillRequest(BaseModel):
    owner_id: str = Field(..., min_length=1)
    batch_size: Optional[int] = Field(None, ge=1, le=500)


class BackfillItemModel(BaseModel):
    receipt_id: str
    outcome: EmbeddingJobOutcome
    error: Optional[str] = None


class BackfillResponse(BaseModel):
    owner_id: str
    processed: int
    successful: int
    skipped: int
    errors: int
    remaining: int
    cancelled: bool = False
    results: List[BackfillItemModel] = Field(default_factory=list)

    @classmethod
    def from_result(cls, owner_id: str, result: BackfillResult) -> "BackfillResponse":
        return cls(
            owner_id=owner_id,
            processed=result.processed,
            successful=result.successful,
            skipped=result.skipped,
            errors=result.errors,
            remaining=result.remaining,
            cancelled=result.cancelled,
            results=[
                BackfillItemModel(receipt_id=i.receipt_id, outcome=i.outcome, error=i.error)
                for i in result.items
            ],
        )
