# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-19
# Description: LexicalFallbackRetriever
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, List, Optional

from receipt.Receipt import Receipt, SEARCHABLE_FIELDS
from receipt.types import ResultSource, SearchResult
from store.ReceiptStore import ReceiptStore
from utility.logging_utils import get_class_logger


@dataclass
class LexicalFallbackRetriever:
    """
    Case-insensitive substring match over description, brand, model,
    store and location.

    Used only when vector retrieval is unavailable. Every hit carries the
    same nominal relevance_score (not a similarity), tagged source=lexical.
    """
    store: ReceiptStore
    nominal_score: float = 0.7
    default_limit: int = 5
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def retrieve(self, query: str, owner_id: str, limit: Optional[int] = None) -> List[SearchResult]:
        n_results = self.default_limit if limit is None else limit
        needle = (query or "").strip()
        if not needle or not owner_id:
            return []

        receipts = self.store.search_text(owner_id, needle, fields=SEARCHABLE_FIELDS, limit=n_results)
        results = [self._to_result(r) for r in receipts if r.owner_id == owner_id]

        self.logger.info("retrieve: owner=%s query=%r matches=%d", owner_id, needle[:80], len(results))
        return results

    def _to_result(self, receipt: Receipt) -> SearchResult:
        return SearchResult(
            receipt_id=receipt.id,
            title=receipt.description or "Unknown Product",
            brand=receipt.brand or "Unknown Brand",
            relevance_score=self.nominal_score,
            source=ResultSource.LEXICAL,
            model=receipt.model,
            store=receipt.store,
            location=receipt.location,
            purchase_date=receipt.purchase_date,
            amount=receipt.amount,
            warranty_period=receipt.warranty_period or "Unknown",
            country=receipt.country,
        )
