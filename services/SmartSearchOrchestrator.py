# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-27
# Updated: 2026-09-22
# Description: SmartSearchOrchestrator.py
# -----------------------------------------------------------------------------
import logging
from typing import List, Optional, Tuple

from common.Errors import ConfigurationError
from receipt.types import QueryType, ResultSource, SearchResponse, SearchResult
from search import QueryClassifier
from search.LexicalFallbackRetriever import LexicalFallbackRetriever
from search.VectorRetriever import VectorRetriever
from services.AnswerSynthesizer import AnswerSynthesizer
from utility.logging_utils import get_class_logger


class SmartSearchOrchestrator:
    """
    Smart search:
        - classifies the query
        - retrieves receipts via VectorRetriever
        - falls back to LexicalFallbackRetriever when vector retrieval fails
        - asks AnswerSynthesizer for an answer when the query calls for one
        - returns answer + results + query type

    A search never raises for service failures; only ConfigurationError
    from vector retrieval is allowed through.
    """

    def __init__(
            self,
            *,
            vector_retriever: VectorRetriever,
            lexical_retriever: LexicalFallbackRetriever,
            synthesizer: AnswerSynthesizer,
            fallback_on_empty: bool = False,
            logger: logging.Logger | None = None,
    ) -> None:
        self.vector_retriever = vector_retriever
        self.lexical_retriever = lexical_retriever
        self.synthesizer = synthesizer
        self.fallback_on_empty = fallback_on_empty
        self.logger = logger or get_class_logger(self.__class__)

    def search(
            self,
            query: str,
            owner_id: str,
            *,
            limit: Optional[int] = None,
            threshold: Optional[float] = None,
    ) -> SearchResponse:
        q = (query or "").strip()
        if not q:
            return SearchResponse(results=[], query_type=QueryType.LEXICAL_SEARCH)

        query_type = QueryClassifier.classify(q)
        self.logger.info("search: owner=%s query='%s' type=%s (start)", owner_id, q[:120], query_type.value)

        results, source, message = self._retrieve(q, owner_id, limit=limit, threshold=threshold)
        response = SearchResponse(
            results=results,
            query_type=query_type,
            source=source,
            fallback=source is ResultSource.LEXICAL,
            message=message,
        )

        if results and QueryClassifier.needs_synthesis(q, query_type):
            answer = self.synthesizer.synthesize(q, results, query_type)
            if answer is not None and answer.text:
                response.answer = answer.text

        self.logger.info(
            "search: results=%d source=%s answer=%s (done)",
            len(response.results),
            response.source.value,
            response.answer is not None,
        )
        return response

    def _retrieve(
            self,
            query: str,
            owner_id: str,
            *,
            limit: Optional[int],
            threshold: Optional[float],
    ) -> Tuple[List[SearchResult], ResultSource, Optional[str]]:
        try:
            results = self.vector_retriever.retrieve(query, owner_id, limit=limit, threshold=threshold)
        except ConfigurationError:
            raise
        except Exception as e:
            self.logger.warning("Vector search failed, falling back to text search: %s", e)
            return self._fallback(query, owner_id, limit, "Used text search due to vector search failure")

        if not results and self.fallback_on_empty:
            self.logger.info("Vector search returned no results, trying text search")
            return self._fallback(query, owner_id, limit, "Used text search because vector search found no matches")

        return results, ResultSource.VECTOR, None

    def _fallback(
            self,
            query: str,
            owner_id: str,
            limit: Optional[int],
            message: str,
    ) -> Tuple[List[SearchResult], ResultSource, Optional[str]]:
        try:
            results = self.lexical_retriever.retrieve(query, owner_id, limit=limit)
        except Exception as e:
            self.logger.error("Text search failed as well: %s", e, exc_info=True)
            return [], ResultSource.LEXICAL, "Both vector and text search failed"
        return results, ResultSource.LEXICAL, message
