# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-09-24
# Description: search.py
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import BaseModel, Field

from receipt.types import QueryType, ResultSource, SearchResponse as SearchResponseData


class SearchRequest(BaseModel):
    # Blank queries are allowed and answered with an empty result set
    query: str = ""
    owner_id: str = Field(..., min_length=1)
    limit: Optional[int] = Field(None, ge=1, le=50)
    threshold: Optional[float] = Field(None, ge=0.0, le=1.0)


class SearchHit(BaseModel):
    id: str
    title: str
    brand: str
    model: Optional[str] = None
    store: Optional[str] = None
    location: Optional[str] = None
    purchase_date: Optional[str] = None
    amount: Optional[float] = None
    warranty_period: Optional[str] = None
    country: Optional[str] = None
    # vector: cosine similarity; lexical: fixed nominal score
    relevance_score: float
    source: ResultSource


class SearchResponse(BaseModel):
    query: str
    query_type: QueryType
    source: ResultSource
    answer: Optional[str] = None
    results: List[SearchHit] = Field(default_factory=list)
    fallback: bool = False
    message: Optional[str] = None

    @classmethod
    def from_data(cls, query: str, data: SearchResponseData) -> "SearchResponse":
        return cls(
            query=query,
            query_type=data.query_type,
            source=data.source,
            answer=data.answer,
            results=[
                SearchHit(
                    id=r.receipt_id,
                    title=r.title,
                    brand=r.brand,
                    model=r.model,
                    store=r.store,
                    location=r.location,
                    purchase_date=r.purchase_date,
                    amount=r.amount,
                    warranty_period=r.warranty_period,
                    country=r.country,
                    relevance_score=r.relevance_score,
                    source=r.source,
                )
                for r in data.results
            ],
            fallback=data.fallback,
            message=data.message,
        )
