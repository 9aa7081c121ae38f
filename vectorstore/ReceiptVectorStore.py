# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-15
# Updated: 2026-09-17
# Description: ReceiptVectorStore
# -----------------------------------------------------------------------------

from typing import Protocol, Sequence, Dict, Any, runtime_checkable

from receipt.Receipt import Receipt


@runtime_checkable
class ReceiptVectorStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def upsert_receipt_embedding(
            self,
            receipt: Receipt,
            vector: Sequence[float],
    ) -> None:
        ...

    def query_embedding(
            self,
            vector: Sequence[float],
            owner_id: str,
            n_results: int = 5,
    ) -> Dict[str, Any]:
        ...
