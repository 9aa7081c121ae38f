# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-15
# Description: Receipt
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Fixed field order for the composite text that gets embedded
CONTENT_FIELDS = (
    "description",
    "brand",
    "model",
    "store",
    "location",
    "warranty_period",
)

# Fields the lexical fallback matches against
SEARCHABLE_FIELDS = ("description", "brand", "model", "store", "location")

# Characters trimmed from field values; the SQLite store trims the same set
BLANK_CHARS = " \t\r\n"


@dataclass
class Receipt:
    """
    One owner-scoped purchase record.

    `embedding` is a derived cache of the composite text: either None or a
    vector of exactly the configured dimensionality.
    """

    # Core identifiers
    id: str
    owner_id: str

    # Textual attributes
    description: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    store: Optional[str] = None
    location: Optional[str] = None
    purchase_date: Optional[str] = None  # ISO date
    amount: Optional[float] = None
    warranty_period: Optional[str] = None
    country: Optional[str] = None

    embedding: Optional[List[float]] = None

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    def content_text(self) -> str:
        """
        Space-joined non-empty textual attributes in CONTENT_FIELDS order.
        Returns "" when there is nothing to embed.
        """
        parts = []
        for name in CONTENT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str) and value.strip(BLANK_CHARS):
                parts.append(value.strip(BLANK_CHARS))
        return " ".join(parts)

    def to_metadata(self) -> Dict[str, Any]:
        """
        Metadata dict for the vector index. None values are dropped
        because Chroma only accepts str/int/float/bool.
        """
        meta = {
            "receipt_id": self.id,
            "owner_id": self.owner_id,
            "description": self.description,
            "brand": self.brand,
            "model": self.model,
            "store": self.store,
            "location": self.location,
            "purchase_date": self.purchase_date,
            "amount": float(self.amount) if self.amount is not None else None,
            "warranty_period": self.warranty_period,
            "country": self.country,
        }
        return {k: v for k, v in meta.items() if v is not None}

    def short_preview(self, n: int = 80) -> str:
        """Return a compact preview for logging/debugging."""
        clean = " ".join(self.content_text().split())
        return (clean[:n] + "...") if len(clean) > n else clean
