# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-09-19
# Description: VectorRetriever
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from common.Errors import TransportError
from embedding.ReceiptEmbedder import ReceiptEmbedder
from receipt.types import ResultSource, SearchResult
from utility.logging_utils import get_class_logger
from vectorstore.ReceiptVectorStore import ReceiptVectorStore


@dataclass
class VectorRetriever:
    """
    Semantic retrieval: embed the query, ask the vector index for the
    owner's nearest receipts, keep those above the similarity threshold.

    relevance_score is a true similarity (1 - cosine distance, clamped to
    [0, 1]). Failures raise TransportError so the caller can fall back.
    """
    embedder: ReceiptEmbedder
    store: ReceiptVectorStore
    default_limit: int = 5
    default_threshold: float = 0.3
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def retrieve(
            self,
            query: str,
            owner_id: str,
            limit: Optional[int] = None,
            threshold: Optional[float] = None,
    ) -> List[SearchResult]:
        n_results = self.default_limit if limit is None else limit
        min_score = self.default_threshold if threshold is None else threshold

        outcome = self.embedder.embed_text(query)
        if not outcome.ok:
            raise TransportError(f"Query embedding failed: {outcome.message}", kind=outcome.kind)

        try:
            raw = self.store.query_embedding(outcome.data, owner_id=owner_id, n_results=n_results)
        except Exception as e:
            raise TransportError(f"Vector search failed: {e}") from e

        hits = self.to_hits(raw, owner_id=owner_id)
        results = [h for h in hits if h.relevance_score > min_score]
        results.sort(key=lambda r: r.relevance_score, reverse=True)

        self.logger.info(
            "retrieve: owner=%s hits=%d kept=%d (threshold=%.2f)",
            owner_id, len(hits), len(results), min_score,
        )
        return results[:n_results]

    @staticmethod
    def _similarity(distance: Any) -> float:
        # cosine distance is in [0, 2]; similarity = 1 - distance, clamped
        return max(0.0, min(1.0, 1.0 - float(distance)))

    @classmethod
    def to_hits(cls, raw: Dict[str, Any], owner_id: str) -> List[SearchResult]:
        """
        Convert a Chroma-style query response (list-of-lists per query)
        into SearchResults. Anything not shaped like that is a
        TransportError; hits for another owner are dropped.
        """
        if not isinstance(raw, dict):
            raise TransportError(f"Malformed vector search response: {type(raw).__name__}", kind="malformed")

        try:
            ids0 = (raw.get("ids") or [[]])[0] or []
            metas0 = (raw.get("metadatas") or [[]])[0] or []
            dists0 = (raw.get("distances") or [[]])[0] or []
        except (IndexError, TypeError) as e:
            raise TransportError(f"Malformed vector search response: {e}", kind="malformed") from e

        if len(metas0) != len(ids0) or len(dists0) != len(ids0):
            raise TransportError(
                f"Malformed vector search response: ids={len(ids0)} metadatas={len(metas0)} distances={len(dists0)}",
                kind="malformed",
            )

        hits: List[SearchResult] = []
        for receipt_id, md, dist in zip(ids0, metas0, dists0):
            md = md if isinstance(md, dict) else {}
            if md.get("owner_id") != owner_id or dist is None:
                continue

            amount = md.get("amount")
            hits.append(SearchResult(
                receipt_id=str(receipt_id),
                title=md.get("description") or "Unknown Product",
                brand=md.get("brand") or "Unknown Brand",
                relevance_score=cls._similarity(dist),
                source=ResultSource.VECTOR,
                model=md.get("model"),
                store=md.get("store"),
                location=md.get("location"),
                purchase_date=md.get("purchase_date"),
                amount=float(amount) if amount is not None else None,
                warranty_period=md.get("warranty_period") or "Unknown",
                country=md.get("country"),
            ))
        return hits
