# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-21
# Updated: 2026-09-21
# Description: EmbeddingIndexer.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
import threading
from typing import Optional

from common.Errors import ContentError
from embedding.ReceiptEmbedder import ReceiptEmbedder
from receipt.Receipt import Receipt
from receipt.types import BackfillItem, BackfillResult, EmbeddingJobOutcome, EmbeddingStatus
from store.ReceiptStore import ReceiptStore
from utility.Throttle import Throttle
from utility.logging_utils import get_class_logger
from vectorstore.ReceiptVectorStore import ReceiptVectorStore


class EmbeddingIndexer:
    """
    Owns embedding coverage for an owner's receipts:
      - check_status(): how many receipts have / lack an embedding
      - backfill(): embed receipts with no embedding, one at a time
        (embed -> upsert into vector index -> persist on the record)

    Receipts are processed sequentially with a throttle between them. A
    failing receipt is logged and counted; it keeps its missing embedding and
    is picked up again by the next backfill.
    """

    def __init__(
        self,
        *,
        store: ReceiptStore,
        vector_store: ReceiptVectorStore,
        embedder: ReceiptEmbedder,
        throttle: Throttle,
        default_batch_size: int = 5,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.vector_store = vector_store
        self.embedder = embedder
        self.throttle = throttle
        self.default_batch_size = default_batch_size
        self.logger = logger or get_class_logger(self.__class__)

    def check_status(self, owner_id: str) -> EmbeddingStatus:
        status = self.store.embedding_status(owner_id)
        self.logger.info(
            "Embedding status for owner '%s': total=%d with=%d without=%d",
            owner_id,
            status.total,
            status.with_embedding,
            status.without_embedding,
        )
        return status

    def backfill(
        self,
        owner_id: str,
        batch_size: Optional[int] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> BackfillResult:
        if not owner_id:
            raise ValueError("owner_id is required")

        size = self.default_batch_size if batch_size is None else batch_size
        if size < 1:
            raise ValueError(f"batch_size must be >= 1, got {size}")

        # Missing credentials fail the whole call before any record is touched
        self.embedder.ensure_configured()

        receipts = self.store.list_without_embedding(owner_id, limit=size)
        self.logger.info(
            "Starting backfill for owner '%s': %d receipt(s) without embeddings (batch=%d)",
            owner_id,
            len(receipts),
            size,
        )

        result = BackfillResult()
        if not receipts:
            return result

        self.throttle.reset()
        for receipt in receipts:
            if cancel_event is not None and cancel_event.is_set():
                self.logger.warning(
                    "Backfill for owner '%s' cancelled after %d receipt(s)", owner_id, result.processed
                )
                result.cancelled = True
                break

            self.throttle.wait()
            result.record(self._process_receipt(receipt))

        result.remaining = self.store.embedding_status(owner_id).without_embedding

        self.logger.info(
            "Backfill completed for owner '%s': %d successful, %d skipped, %d errors, %d remaining",
            owner_id,
            result.successful,
            result.skipped,
            result.errors,
            result.remaining,
        )
        return result

    def _process_receipt(self, receipt: Receipt) -> BackfillItem:
        try:
            content = receipt.content_text()
            if not content:
                raise ContentError(f"Receipt '{receipt.id}' has no content to embed")

            self.logger.debug("Embedding receipt '%s': %r", receipt.id, receipt.short_preview())

            outcome = self.embedder.embed_text(content)
            if not outcome.ok:
                raise RuntimeError(f"{outcome.kind}: {outcome.message}")

            vector = outcome.data
            self.vector_store.upsert_receipt_embedding(receipt, vector)
            self.store.update_embedding(receipt.id, receipt.owner_id, vector)

        except ContentError as e:
            self.logger.warning("Skipping receipt: %s", e)
            return BackfillItem(receipt.id, EmbeddingJobOutcome.SKIPPED_NO_CONTENT)
        except Exception as e:
            self.logger.error("Failed to embed receipt '%s': %s", receipt.id, e, exc_info=True)
            return BackfillItem(receipt.id, EmbeddingJobOutcome.ERROR, error=str(e))

        self.logger.info("Embedded receipt '%s'", receipt.id)
        return BackfillItem(receipt.id, EmbeddingJobOutcome.SUCCESS)
