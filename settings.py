# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-09-15
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Storage
# -----------------------------------------------------------------------------
DB_PATH = _env("RECEIPT_DB_PATH", "./data/receipts.db")

# Local Chroma path, only used when CHROMA_API_KEY is not set
CHROMA_PATH = _env("RECEIPT_CHROMA_PATH", "./data/chroma")

VECTOR_COLLECTION_DEFAULT = _env("RECEIPT_VECTOR_COLLECTION", "receipts")


# -----------------------------------------------------------------------------
# Embeddings / backfill
# -----------------------------------------------------------------------------
EMBEDDING_DIMENSIONS = _env_int("RECEIPT_EMBEDDING_DIMENSIONS", 384)
EMBED_MAX_RETRIES = _env_int("RECEIPT_EMBED_MAX_RETRIES", 3)

BACKFILL_BATCH_SIZE = _env_int("RECEIPT_BACKFILL_BATCH_SIZE", 5)
# Pause between records during backfill (external rate limits)
BACKFILL_DELAY_SECONDS = _env_float("RECEIPT_BACKFILL_DELAY_SECONDS", 0.1)


# -----------------------------------------------------------------------------
# Search defaults
# -----------------------------------------------------------------------------
SEARCH_LIMIT = _env_int("RECEIPT_SEARCH_LIMIT", 5)
MATCH_THRESHOLD = _env_float("RECEIPT_MATCH_THRESHOLD", 0.3)

# Nominal score given to every lexical fallback hit (not a similarity)
LEXICAL_FALLBACK_SCORE = _env_float("RECEIPT_LEXICAL_FALLBACK_SCORE", 0.7)

# Off by default: an empty vector result is a valid answer
FALLBACK_ON_EMPTY = _env_bool("RECEIPT_FALLBACK_ON_EMPTY", False)


# -----------------------------------------------------------------------------
# Answer synthesis defaults
# -----------------------------------------------------------------------------
SYNTHESIS_TEMPERATURE = _env_float("RECEIPT_SYNTHESIS_TEMPERATURE", 0.3)
SYNTHESIS_MAX_TOKENS = _env_int("RECEIPT_SYNTHESIS_MAX_TOKENS", 500)
MAX_CONTEXT_CHARS = _env_int("RECEIPT_MAX_CONTEXT_CHARS", 12000)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if EMBEDDING_DIMENSIONS <= 0:
    raise RuntimeError("EMBEDDING_DIMENSIONS must be positive")

if not 0.0 <= LEXICAL_FALLBACK_SCORE <= 1.0:
    raise RuntimeError("LEXICAL_FALLBACK_SCORE must be within [0, 1]")

if not VECTOR_COLLECTION_DEFAULT:
    raise RuntimeError("VECTOR_COLLECTION_DEFAULT resolved to empty value")
