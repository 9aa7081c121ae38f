# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Description: test_smart_search.py
# -----------------------------------------------------------------------------
import re

import pytest

from chat.OpenAIChat import OpenAIChat
from common.Errors import ConfigurationError, TransportError
from conftest import FakeChatAPI, NoSleepThrottle, fake_openai_client, fake_vector, make_config
from receipt.Receipt import Receipt
from receipt.types import AnswerResult, QueryType, ResultSource, SearchResult
from search.LexicalFallbackRetriever import LexicalFallbackRetriever
from search.VectorRetriever import VectorRetriever
from services.AnswerSynthesizer import AnswerSynthesizer
from services.EmbeddingIndexer import EmbeddingIndexer
from services.SmartSearchOrchestrator import SmartSearchOrchestrator


def _hit(rid: str, source=ResultSource.VECTOR, score=0.9) -> SearchResult:
    return SearchResult(receipt_id=rid, title=rid, brand="Brand", relevance_score=score, source=source)


class StubRetriever:
    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.calls = []

    def retrieve(self, query, owner_id, limit=None, threshold=None):
        self.calls.append((query, owner_id, limit))
        if self.error is not None:
            raise self.error
        return list(self.results)


class StubSynthesizer:
    def __init__(self, text="answer"):
        self.text = text
        self.calls = []

    def synthesize(self, query, results, query_type):
        self.calls.append((query, list(results), query_type))
        return AnswerResult(self.text, query_type) if self.text else None


def _orchestrator(vector=None, lexical=None, synth=None, **kwargs):
    return SmartSearchOrchestrator(
        vector_retriever=vector or StubRetriever(),
        lexical_retriever=lexical or StubRetriever(),
        synthesizer=synth or StubSynthesizer(),
        **kwargs,
    )


def test_empty_query_short_circuits():
    vector, lexical, synth = StubRetriever(), StubRetriever(), StubSynthesizer()
    response = _orchestrator(vector, lexical, synth).search("   ", "u1")

    assert response.results == []
    assert response.query_type is QueryType.LEXICAL_SEARCH
    assert response.answer is None
    assert vector.calls == lexical.calls == synth.calls == []


def test_vector_results_and_synthesized_answer():
    synth = StubSynthesizer("You spent $52.30")
    response = _orchestrator(StubRetriever([_hit("bag")]), synth=synth).search("how much on bags", "u1")

    assert response.query_type is QueryType.AGGREGATE_SUMMARY
    assert response.source is ResultSource.VECTOR
    assert response.fallback is False
    assert response.answer == "You spent $52.30"
    assert [r.receipt_id for r in response.results] == ["bag"]


def test_lexical_query_skips_synthesis():
    synth = StubSynthesizer()
    response = _orchestrator(StubRetriever([_hit("a")]), synth=synth).search("apple", "u1")

    assert response.answer is None
    assert synth.calls == []


def test_falls_back_to_lexical_on_vector_failure():
    lexical = StubRetriever([_hit("a", ResultSource.LEXICAL, 0.7)])
    response = _orchestrator(StubRetriever(error=TransportError("down")), lexical).search("apple", "u1", limit=3)

    assert response.fallback is True
    assert response.source is ResultSource.LEXICAL
    assert response.message == "Used text search due to vector search failure"
    assert lexical.calls == [("apple", "u1", 3)]
    assert response.results[0].relevance_score == 0.7


def test_both_retrievers_failing_still_returns_a_response():
    response = _orchestrator(
        StubRetriever(error=TransportError("down")),
        StubRetriever(error=RuntimeError("db locked")),
    ).search("what did I buy?", "u1")

    assert response.results == []
    assert response.answer is None
    assert response.message == "Both vector and text search failed"


def test_configuration_error_propagates():
    lexical = StubRetriever()
    orchestrator = _orchestrator(StubRetriever(error=ConfigurationError("no key", ["OPENAI_API_KEY"])), lexical)
    with pytest.raises(ConfigurationError):
        orchestrator.search("apple", "u1")
    assert lexical.calls == []


def test_empty_vector_result_is_final_unless_configured():
    lexical = StubRetriever([_hit("a", ResultSource.LEXICAL, 0.7)])

    plain = _orchestrator(StubRetriever([]), lexical).search("apple", "u1")
    assert plain.results == []
    assert plain.source is ResultSource.VECTOR
    assert lexical.calls == []

    opted_in = _orchestrator(StubRetriever([]), lexical, fallback_on_empty=True).search("apple", "u1")
    assert opted_in.fallback is True
    assert [r.receipt_id for r in opted_in.results] == ["a"]


def test_no_synthesis_when_nothing_found():
    synth = StubSynthesizer()
    response = _orchestrator(StubRetriever([]), synth=synth).search("how much did I spend?", "u1")
    assert response.answer is None
    assert synth.calls == []


def test_failed_synthesis_keeps_results():
    response = _orchestrator(StubRetriever([_hit("a")]), synth=StubSynthesizer(text=None)).search(
        "what warranty expires soonest?", "u1"
    )
    assert response.answer is None
    assert len(response.results) == 1


# -----------------------------------------------------------------------------
# End to end: SQLite records -> backfill -> vector search -> answer
# -----------------------------------------------------------------------------
def _answer_from_context(messages):
    amounts = re.findall(r"\$\d[\d,]*\.\d{2}", messages[-1]["content"])
    return f"You spent {amounts[0]} on bags." if amounts else "I could not find any bags."


def test_end_to_end_laptop_bag(sqlite_store, vector_store, embedder):
    # two records already embedded and indexed, one waiting for backfill
    for r in [
        Receipt(id="phone", owner_id="u1", description="iPhone 15", brand="Apple", amount=999.0),
        Receipt(id="cans", owner_id="u1", description="Headphones", brand="Sony", amount=349.99),
    ]:
        vec = fake_vector(r.content_text())
        r.embedding = vec
        sqlite_store.add_receipt(r)
        vector_store.upsert_receipt_embedding(r, vec)
    sqlite_store.add_receipt(Receipt(id="bag", owner_id="u1", description="Laptop Bag", store="Office Depot", amount=52.30))

    indexer = EmbeddingIndexer(
        store=sqlite_store, vector_store=vector_store, embedder=embedder, throttle=NoSleepThrottle()
    )
    assert indexer.check_status("u1").without_embedding == 1
    assert indexer.backfill("u1").successful == 1

    chat_api = FakeChatAPI(reply=_answer_from_context)
    orchestrator = SmartSearchOrchestrator(
        vector_retriever=VectorRetriever(embedder=embedder, store=vector_store),
        lexical_retriever=LexicalFallbackRetriever(store=sqlite_store),
        synthesizer=AnswerSynthesizer(
            chat_client=OpenAIChat(cfg=make_config(), client=fake_openai_client(completions=chat_api))
        ),
    )

    response = orchestrator.search("how much did I spend on bags", "u1")

    assert response.query_type is QueryType.AGGREGATE_SUMMARY
    assert [r.receipt_id for r in response.results] == ["bag"]
    assert response.results[0].relevance_score > 0
    assert response.source is ResultSource.VECTOR
    assert "52.30" in response.answer
    assert "$52.30" in chat_api.calls[0]["messages"][1]["content"]
