# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-16
# Updated: 2026-09-17
# Description: ChromaReceiptVectorStore
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Sequence, Dict, Any, Optional

import chromadb

from config.Config import Config
from receipt.Receipt import Receipt
from utility.logging_utils import get_class_logger
from vectorstore.ReceiptVectorStore import ReceiptVectorStore


@dataclass
class ChromaReceiptVectorStore(ReceiptVectorStore):
    """
    Similarity-search index over receipt embeddings.

    One item per receipt (id = receipt id), cosine space, owner_id kept in
    metadata so every query is filtered to a single owner.
    """
    cfg: Config
    collection_name: str = "receipts"
    persist_path: str = "./data/chroma"
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if self.client is None:
            self.client = self._build_client()

        self.collection = self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
        )
        self.logger.info(
            "Chroma collection ready: '%s' (cloud=%s)",
            self.collection_name,
            self.cfg.uses_chroma_cloud,
        )

    def _build_client(self) -> Any:
        if self.cfg.uses_chroma_cloud:
            self.cfg.require(*Config.CHROMA_CLOUD_FIELDS, purpose="Chroma Cloud")
            self.logger.info(
                "Initialising Chroma Cloud client "
                f"(tenant={self.cfg.chroma_tenant}, database={self.cfg.chroma_database})"
            )
            return chromadb.CloudClient(
                tenant=self.cfg.chroma_tenant,
                database=self.cfg.chroma_database,
                api_key=self.cfg.chroma_api_key,
            )

        self.logger.info("Initialising local Chroma client (path=%s)", self.persist_path)
        return chromadb.PersistentClient(path=self.persist_path)

    def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Chroma and our collection?
        """
        try:
            # count() is cheap and exercises the connection + auth
            _ = self.collection.count()
            return True
        except Exception as e:
            self.logger.error("Chroma connection failed: %s", e)
            return False

    def count(self, owner_id: Optional[str] = None) -> int:
        if owner_id is None:
            return self.collection.count()
        res = self.collection.get(where={"owner_id": {"$eq": owner_id}}, include=[])
        return len(res.get("ids") or [])

    def upsert_receipt_embedding(
            self,
            receipt: Receipt,
            vector: Sequence[float],
    ) -> None:
        if not receipt.owner_id:
            raise ValueError(f"Receipt '{receipt.id}' has no owner_id")

        vec = vector.tolist() if hasattr(vector, "tolist") else list(vector)

        self.collection.upsert(
            ids=[receipt.id],
            documents=[receipt.content_text()],
            embeddings=[vec],
            metadatas=[receipt.to_metadata()],
        )
        self.logger.debug(
            "Upserted receipt '%s' (owner=%s) into collection '%s'",
            receipt.id,
            receipt.owner_id,
            self.collection_name,
        )

    def query_embedding(
            self,
            vector: Sequence[float],
            owner_id: str,
            n_results: int = 5,
    ) -> Dict[str, Any]:
        if not owner_id:
            raise ValueError("owner_id is required for vector queries")

        vec = vector.tolist() if hasattr(vector, "tolist") else list(vector)

        self.logger.info(
            "Querying Chroma collection '%s' (owner=%s, n_results=%d)",
            self.collection_name,
            owner_id,
            n_results,
        )

        res = self.collection.query(
            query_embeddings=[vec],
            n_results=n_results,
            where={"owner_id": {"$eq": owner_id}},
            include=["metadatas", "distances"],
        )

        self.logger.info(
            "Chroma search complete: returned %d results (requested %d)",
            len((res.get("ids") or [[]])[0]),
            n_results,
        )
        return res
