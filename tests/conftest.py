# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Updated: 2026-09-25
# Description: conftest.py
# -----------------------------------------------------------------------------

import re
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from config.Config import Config  # noqa: E402
from receipt.Receipt import Receipt  # noqa: E402

DIMS = 384

# Tiny bag-of-words vocabulary; anything else lands in the last dimension
VOCAB = {
    "bag": 0,
    "laptop": 1,
    "iphone": 2,
    "apple": 3,
    "headphone": 4,
    "sony": 5,
    "phone": 6,
    "warranty": 7,
}
OTHER_DIM = DIMS - 1


def fake_vector(text: str) -> List[float]:
    vec = [0.0] * DIMS
    for token in re.findall(r"[a-z0-9]+", (text or "").lower()):
        stem = token[:-1] if token.endswith("s") and len(token) > 3 else token
        if stem in VOCAB:
            vec[VOCAB[stem]] += 1.0
    if not any(vec):
        vec[OTHER_DIM] = 1.0
    return vec


class FakeEmbeddingsAPI:
    """Stands in for `OpenAI().embeddings`."""

    def __init__(self, fail_times: int = 0, dims: int = DIMS):
        self.fail_times = fail_times
        self.dims = dims
        self.calls: List[Dict[str, Any]] = []

    def create(self, *, model: str, input: List[str], dimensions: int):
        self.calls.append({"model": model, "input": list(input), "dimensions": dimensions})
        if self.fail_times > 0:
            self.fail_times -= 1
            raise ConnectionError("simulated network failure")
        data = []
        for text in input:
            vec = fake_vector(text)
            if self.dims != DIMS:
                vec = (vec + [0.0] * self.dims)[: self.dims]
            data.append(SimpleNamespace(embedding=vec))
        return SimpleNamespace(data=data)


class FakeChatAPI:
    """Stands in for `OpenAI().chat.completions`."""

    def __init__(self, reply: Callable[[List[Dict[str, str]]], Optional[str]] | str | None = "OK"):
        self.reply = reply
        self.calls: List[Dict[str, Any]] = []

    def create(self, **params):
        self.calls.append(params)
        if isinstance(self.reply, Exception):
            raise self.reply
        content = self.reply(params["messages"]) if callable(self.reply) else self.reply
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], model=params["model"], usage=None)


def fake_openai_client(embeddings: Optional[FakeEmbeddingsAPI] = None, completions: Optional[FakeChatAPI] = None):
    return SimpleNamespace(
        embeddings=embeddings or FakeEmbeddingsAPI(),
        chat=SimpleNamespace(completions=completions or FakeChatAPI()),
    )


class InMemoryVectorStore:
    """Cosine-distance index with the same response shape as Chroma."""

    def __init__(self):
        self.items: Dict[str, Dict[str, Any]] = {}
        self.fail_with: Optional[Exception] = None

    def test_connection(self) -> bool:
        return True

    def upsert_receipt_embedding(self, receipt: Receipt, vector) -> None:
        self.items[receipt.id] = {"vector": np.asarray(vector, dtype=float), "metadata": receipt.to_metadata()}

    def query_embedding(self, vector, owner_id: str, n_results: int = 5) -> Dict[str, Any]:
        if self.fail_with is not None:
            raise self.fail_with
        q = np.asarray(vector, dtype=float)
        scored = []
        for rid, item in self.items.items():
            if item["metadata"].get("owner_id") != owner_id:
                continue
            v = item["vector"]
            cos = float(q @ v / ((np.linalg.norm(q) * np.linalg.norm(v)) + 1e-12))
            scored.append((1.0 - cos, rid, item["metadata"]))
        scored.sort(key=lambda t: t[0])
        scored = scored[:n_results]
        return {
            "ids": [[rid for _, rid, _ in scored]],
            "metadatas": [[md for _, _, md in scored]],
            "distances": [[d for d, _, _ in scored]],
        }


class NoSleepThrottle:
    def __init__(self):
        self.waits = 0
        self.resets = 0

    def wait(self) -> float:
        self.waits += 1
        return 0.0

    def reset(self) -> None:
        self.resets += 1


def make_config(**overrides) -> Config:
    values = {
        "openai_api_key": "sk-test",
        "openai_base_url": "",
        "openai_chat_model": "gpt-4o",
        "openai_embed_model": "text-embedding-3-small",
        "chroma_api_key": "",
        "chroma_tenant": "",
        "chroma_database": "",
    }
    values.update(overrides)
    return Config(**values)


@pytest.fixture
def cfg() -> Config:
    return make_config()


@pytest.fixture
def sqlite_store(tmp_path):
    from store.SQLiteReceiptStore import SQLiteReceiptStore

    return SQLiteReceiptStore(db_path=str(tmp_path / "receipts.db"), embedding_dimensions=DIMS)


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def embeddings_api() -> FakeEmbeddingsAPI:
    return FakeEmbeddingsAPI()


@pytest.fixture
def embedder(cfg, embeddings_api):
    from embedding.ReceiptEmbedder import ReceiptEmbedder

    return ReceiptEmbedder(
        cfg,
        dimensions=DIMS,
        client=fake_openai_client(embeddings=embeddings_api),
        sleep=lambda _s: None,
    )
