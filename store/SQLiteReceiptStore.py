# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-16
# Description: SQLiteReceiptStore
# -----------------------------------------------------------------------------
import json
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from receipt.Receipt import Receipt, BLANK_CHARS, CONTENT_FIELDS, SEARCHABLE_FIELDS
from receipt.types import EmbeddingStatus
from store.ReceiptStore import ReceiptStore
from utility.logging_utils import get_class_logger


@dataclass
class SQLiteReceiptStore(ReceiptStore):
    """
    Persisted receipt records. The `embedding` column holds a JSON array
    or NULL; NULL is the "needs backfill" flag.
    """
    db_path: str
    embedding_dimensions: int = 384
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._init_db()
        self.logger.info(
            "SQLiteReceiptStore ready (db_path=%s, dims=%d)",
            self.db_path,
            self.embedding_dimensions,
        )

    def _init_db(self) -> None:
        with self._get_db() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS receipts (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    description TEXT,
                    brand TEXT,
                    model TEXT,
                    store TEXT,
                    location TEXT,
                    purchase_date TEXT,
                    amount REAL,
                    warranty_period TEXT,
                    country TEXT,
                    embedding TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_receipts_owner ON receipts(owner_id)')

    @contextmanager
    def _get_db(self):
        """Get a database connection (one per operation)."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def _row_to_receipt(row: sqlite3.Row) -> Receipt:
        raw = row["embedding"]
        return Receipt(
            id=row["id"],
            owner_id=row["owner_id"],
            description=row["description"],
            brand=row["brand"],
            model=row["model"],
            store=row["store"],
            location=row["location"],
            purchase_date=row["purchase_date"],
            amount=row["amount"],
            warranty_period=row["warranty_period"],
            country=row["country"],
            embedding=json.loads(raw) if raw else None,
        )

    def _check_dimensions(self, vector: Sequence[float]) -> List[float]:
        values = [float(v) for v in vector]
        if len(values) != self.embedding_dimensions:
            raise ValueError(
                f"Embedding has {len(values)} dimensions, expected {self.embedding_dimensions}"
            )
        return values

    def test_connection(self) -> bool:
        try:
            with self._get_db() as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except Exception as e:
            self.logger.error("SQLite connection failed: %s", e)
            return False

    def add_receipt(self, receipt: Receipt) -> None:
        if not receipt.owner_id:
            raise ValueError(f"Receipt '{receipt.id}' has no owner_id")

        embedding = None
        if receipt.embedding is not None:
            embedding = json.dumps(self._check_dimensions(receipt.embedding))

        with self._get_db() as conn:
            conn.execute('''
                INSERT OR REPLACE INTO receipts
                (id, owner_id, description, brand, model, store, location,
                 purchase_date, amount, warranty_period, country, embedding)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                receipt.id, receipt.owner_id, receipt.description, receipt.brand,
                receipt.model, receipt.store, receipt.location, receipt.purchase_date,
                receipt.amount, receipt.warranty_period, receipt.country, embedding,
            ))
        self.logger.debug("Stored receipt '%s' for owner '%s'", receipt.id, receipt.owner_id)

    def get_receipt(self, receipt_id: str, owner_id: str) -> Optional[Receipt]:
        with self._get_db() as conn:
            row = conn.execute(
                'SELECT * FROM receipts WHERE id = ? AND owner_id = ?',
                (receipt_id, owner_id),
            ).fetchone()
        return self._row_to_receipt(row) if row else None

    @staticmethod
    def _has_content_sql() -> str:
        # Same test as Receipt.content_text(): any content field with non-blank text
        whitespace = " || ".join(f"char({ord(c)})" for c in BLANK_CHARS)
        return " OR ".join(f"TRIM(COALESCE({f}, ''), {whitespace}) != ''" for f in CONTENT_FIELDS)

    def embedding_status(self, owner_id: str) -> EmbeddingStatus:
        has_content = self._has_content_sql()
        with self._get_db() as conn:
            row = conn.execute(f'''
                SELECT COUNT(*) AS total,
                       COUNT(embedding) AS with_embedding,
                       SUM(CASE WHEN embedding IS NULL AND NOT ({has_content}) THEN 1 ELSE 0 END) AS no_content
                FROM receipts WHERE owner_id = ?
            ''', (owner_id,)).fetchone()

        total = int(row["total"] or 0)
        with_embedding = int(row["with_embedding"] or 0)
        no_content = int(row["no_content"] or 0)
        return EmbeddingStatus(
            total=total,
            with_embedding=with_embedding,
            without_embedding=total - with_embedding - no_content,
            no_content=no_content,
        )

    def list_without_embedding(self, owner_id: str, limit: int) -> List[Receipt]:
        if limit <= 0:
            return []
        # Receipts with nothing to embed are never selected; they stay out of every batch
        has_content = self._has_content_sql()
        with self._get_db() as conn:
            rows = conn.execute(
                f'''
                SELECT * FROM receipts
                WHERE owner_id = ? AND embedding IS NULL AND ({has_content})
                ORDER BY rowid
                LIMIT ?
                ''',
                (owner_id, limit),
            ).fetchall()
        return [self._row_to_receipt(r) for r in rows]

    def update_embedding(self, receipt_id: str, owner_id: str, vector: Sequence[float]) -> None:
        payload = json.dumps(self._check_dimensions(vector))
        with self._get_db() as conn:
            cursor = conn.execute(
                'UPDATE receipts SET embedding = ? WHERE id = ? AND owner_id = ?',
                (payload, receipt_id, owner_id),
            )
            if cursor.rowcount == 0:
                raise KeyError(f"Receipt '{receipt_id}' not found for owner '{owner_id}'")

    def search_text(
            self,
            owner_id: str,
            query_text: str,
            fields: Sequence[str] = SEARCHABLE_FIELDS,
            limit: int = 5,
    ) -> List[Receipt]:
        needle = (query_text or "").strip().lower()
        if not needle or limit <= 0:
            return []

        unknown = [f for f in fields if f not in SEARCHABLE_FIELDS]
        if unknown:
            raise ValueError(f"Unsupported search fields: {unknown}")

        # LIKE wildcards in user input are matched literally
        escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"

        clauses = " OR ".join(f"LOWER(COALESCE({f}, '')) LIKE ? ESCAPE '\\'" for f in fields)
        sql = f"SELECT * FROM receipts WHERE owner_id = ? AND ({clauses}) LIMIT ?"
        params: List[Any] = [owner_id, *([pattern] * len(fields)), limit]

        with self._get_db() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_receipt(r) for r in rows]
