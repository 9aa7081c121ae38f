# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-09-24
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from functools import lru_cache

import settings
from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.ReceiptEmbedder import ReceiptEmbedder
from health.TestRunner import TestRunner
from search.LexicalFallbackRetriever import LexicalFallbackRetriever
from search.VectorRetriever import VectorRetriever
from services.AnswerSynthesizer import AnswerSynthesizer
from services.EmbeddingIndexer import EmbeddingIndexer
from services.HealthService import HealthService
from services.SmartSearchOrchestrator import SmartSearchOrchestrator
from store.SQLiteReceiptStore import SQLiteReceiptStore
from utility.Throttle import Throttle
from vectorstore.ChromaReceiptVectorStore import ChromaReceiptVectorStore


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()

        # Core infrastructure
        self.store = SQLiteReceiptStore(
            db_path=settings.DB_PATH,
            embedding_dimensions=settings.EMBEDDING_DIMENSIONS,
        )
        self.embedder = ReceiptEmbedder(
            cfg=self.cfg,
            dimensions=settings.EMBEDDING_DIMENSIONS,
            max_retries=settings.EMBED_MAX_RETRIES,
        )
        self.vector_store = ChromaReceiptVectorStore(
            cfg=self.cfg,
            collection_name=settings.VECTOR_COLLECTION_DEFAULT,
            persist_path=settings.CHROMA_PATH,
        )
        self.openai_chat = OpenAIChat(cfg=self.cfg)

        # Backfill of missing embeddings
        self.indexer = EmbeddingIndexer(
            store=self.store,
            vector_store=self.vector_store,
            embedder=self.embedder,
            throttle=Throttle(settings.BACKFILL_DELAY_SECONDS),
            default_batch_size=settings.BACKFILL_BATCH_SIZE,
        )

        # Smart search: vector retrieval, lexical fallback, answer synthesis
        self.vector_retriever = VectorRetriever(
            embedder=self.embedder,
            store=self.vector_store,
            default_limit=settings.SEARCH_LIMIT,
            default_threshold=settings.MATCH_THRESHOLD,
        )
        self.lexical_retriever = LexicalFallbackRetriever(
            store=self.store,
            nominal_score=settings.LEXICAL_FALLBACK_SCORE,
            default_limit=settings.SEARCH_LIMIT,
        )
        self.synthesizer = AnswerSynthesizer(
            chat_client=self.openai_chat,
            temperature=settings.SYNTHESIS_TEMPERATURE,
            max_tokens=settings.SYNTHESIS_MAX_TOKENS,
            max_context_chars=settings.MAX_CONTEXT_CHARS,
        )
        self.search_service = SmartSearchOrchestrator(
            vector_retriever=self.vector_retriever,
            lexical_retriever=self.lexical_retriever,
            synthesizer=self.synthesizer,
            fallback_on_empty=settings.FALLBACK_ON_EMPTY,
        )

        # Smoke tests / health
        self.test_runner = TestRunner(
            self.cfg,
            store=self.store,
            vector_store=self.vector_store,
            embedder=self.embedder,
            chat_client=self.openai_chat,
        )
        self.health_service = HealthService(test_runner=self.test_runner)


@lru_cache
def get_app_container() -> AppContainer:
    # Built on first request so importing the app never touches storage
    return AppContainer()
