# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-09-17
# Description: ReceiptEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Any, Callable, List, Optional

import numpy as np
from openai import OpenAI

from common.Outcome import (
    Failure,
    Outcome,
    Success,
    KIND_EMPTY,
    KIND_MALFORMED,
    KIND_TRANSPORT,
)
from config.Config import Config
from utility.logging_utils import get_class_logger

# text-embedding-3-* models accept roughly 8191 tokens; ~4 chars per token
MAX_INPUT_CHARS = 8191 * 4


class ReceiptEmbedder:
    """
    Embedding service client.

    Every call returns an Outcome: Success(vectors) or Failure(kind, message).
    Missing credentials raise ConfigurationError on first use.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            dimensions: int = 384,
            max_retries: int = 3,
            normalize: bool = True,
            client: Any = None,
            sleep: Callable[[float], None] = time.sleep,
            logger=None,
    ):
        self.cfg = cfg
        self.dimensions = dimensions
        self.max_retries = max(1, max_retries)
        self.normalize = normalize
        self.model = cfg.openai_embed_model or "text-embedding-3-small"
        self._client = client
        self._sleep = sleep
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info("ReceiptEmbedder initialised (model=%s, dims=%d)", self.model, self.dimensions)

    def _get_client(self) -> Any:
        if self._client is None:
            self.cfg.require(*Config.EMBEDDING_FIELDS, purpose="embeddings")
            self._client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=self.cfg.openai_base_url or None,
            )
        return self._client

    def ensure_configured(self) -> None:
        """Raise ConfigurationError now rather than on the first record."""
        self._get_client()

    def _embed_batch(self, texts: List[str]) -> Outcome[List[List[float]]]:
        client = self._get_client()

        delay = 0.8
        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = client.embeddings.create(
                    model=self.model,
                    input=texts,
                    dimensions=self.dimensions,
                )
                break
            except Exception as e:
                last_error = e
                self.logger.warning(
                    "Embedding batch failed (attempt %d/%d): %s", attempt, self.max_retries, e
                )
                if attempt < self.max_retries:
                    self._sleep(delay)
                    delay *= 1.7  # backoff
        else:
            return Failure(KIND_TRANSPORT, f"Embedding request failed: {last_error}", cause=last_error)

        try:
            arr = np.asarray([d.embedding for d in resp.data], dtype=np.float32)
        except (AttributeError, TypeError, ValueError) as e:
            return Failure(KIND_MALFORMED, f"Unexpected embedding response format: {e}", cause=e)

        if arr.ndim != 2 or arr.shape[0] != len(texts):
            return Failure(KIND_MALFORMED, f"Expected {len(texts)} vectors, got shape {arr.shape}")
        if arr.shape[1] != self.dimensions:
            return Failure(
                KIND_MALFORMED,
                f"Embedding dimension mismatch: expected {self.dimensions}, got {arr.shape[1]}",
            )

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
            arr = arr / norms

        return Success(arr.tolist())

    def embed_texts(self, texts: List[str]) -> Outcome[List[List[float]]]:
        cleaned = [(t or "").strip()[:MAX_INPUT_CHARS] for t in texts]
        if not cleaned or any(not t for t in cleaned):
            return Failure(KIND_EMPTY, "Cannot embed empty text")

        self.logger.debug("Embedding %d text(s) with model=%s", len(cleaned), self.model)
        return self._embed_batch(cleaned)

    def embed_text(self, text: str) -> Outcome[List[float]]:
        outcome = self.embed_texts([text])
        if not outcome.ok:
            return outcome
        return Success(outcome.data[0])
