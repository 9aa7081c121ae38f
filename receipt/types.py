# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-15
# Description: types.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class QueryType(str, Enum):
    LEXICAL_SEARCH = "lexical_search"
    AGGREGATE_SUMMARY = "aggregate_summary"
    OPEN_QUESTION = "open_question"


class ResultSource(str, Enum):
    # relevance_score is 1 - cosine distance
    VECTOR = "vector"
    # relevance_score is the fixed nominal LEXICAL_FALLBACK_SCORE
    LEXICAL = "lexical"
    NONE = "none"


class EmbeddingJobOutcome(str, Enum):
    SKIPPED_NO_CONTENT = "skipped_no_content"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SearchResult:
    receipt_id: str
    title: str
    brand: str
    relevance_score: float
    source: ResultSource
    model: Optional[str] = None
    store: Optional[str] = None
    location: Optional[str] = None
    purchase_date: Optional[str] = None
    amount: Optional[float] = None
    warranty_period: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class AnswerResult:
    text: str
    query_type: QueryType


@dataclass
class SearchResponse:
    results: List[SearchResult]
    query_type: QueryType
    source: ResultSource = ResultSource.NONE
    answer: Optional[str] = None
    fallback: bool = False
    message: Optional[str] = None


@dataclass(frozen=True)
class EmbeddingStatus:
    total: int
    with_embedding: int
    without_embedding: int
    # no text to embed; never selected for backfill and not counted as pending
    no_content: int = 0

    @property
    def percentage_complete(self) -> float:
        embeddable = self.total - self.no_content
        if embeddable <= 0:
            return 0.0
        return round(self.with_embedding / embeddable * 100, 2)


@dataclass(frozen=True)
class BackfillItem:
    receipt_id: str
    outcome: EmbeddingJobOutcome
    error: Optional[str] = None


@dataclass
class BackfillResult:
    processed: int = 0
    successful: int = 0
    skipped: int = 0
    errors: int = 0
    remaining: int = 0
    cancelled: bool = False
    items: List[BackfillItem] = field(default_factory=list)

    def record(self, item: BackfillItem) -> None:
        self.items.append(item)
        self.processed += 1
        if item.outcome is EmbeddingJobOutcome.SUCCESS:
            self.successful += 1
        elif item.outcome is EmbeddingJobOutcome.ERROR:
            self.errors += 1
        else:
            self.skipped += 1
