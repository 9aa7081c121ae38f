# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-16
# Description: ReceiptStore
# -----------------------------------------------------------------------------

from typing import Protocol, Sequence, List, Optional, runtime_checkable

from receipt.Receipt import Receipt
from receipt.types import EmbeddingStatus


@runtime_checkable
class ReceiptStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def add_receipt(self, receipt: Receipt) -> None:
        ...

    def get_receipt(self, receipt_id: str, owner_id: str) -> Optional[Receipt]:
        ...

    def embedding_status(self, owner_id: str) -> EmbeddingStatus:
        ...

    def list_without_embedding(self, owner_id: str, limit: int) -> List[Receipt]:
        ...

    def update_embedding(self, receipt_id: str, owner_id: str, vector: Sequence[float]) -> None:
        ...

    def search_text(
            self,
            owner_id: str,
            query_text: str,
            fields: Sequence[str],
            limit: int,
    ) -> List[Receipt]:
        ...
