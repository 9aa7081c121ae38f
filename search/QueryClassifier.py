# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-18
# Description: QueryClassifier.py
# -----------------------------------------------------------------------------
import re
from typing import Iterable, Pattern

from receipt.types import QueryType

SUMMARY_KEYWORDS = ("how much", "total", "spent", "sum", "cost")
QUESTION_KEYWORDS = ("what", "when", "where", "why", "how", "which", "who")

# Extra triggers for is_synthesis_worthy()
SYNTHESIS_SUMMARY_WORDS = ("total", "sum", "spent", "cost", "much", "many")
COMPARISON_WORDS = ("compare", "versus", "vs", "between", "analyze", "trend")

# Queries with more words than this get a synthesized answer
MAX_TERSE_WORDS = 3


def _word_pattern(words: Iterable[str]) -> Pattern[str]:
    # Whole words only: "show" must not match "how", "summer" must not match "sum"
    alternatives = "|".join(re.escape(w).replace(r"\ ", r"\s+") for w in words)
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


_SUMMARY_RE = _word_pattern(SUMMARY_KEYWORDS)
_QUESTION_RE = _word_pattern(QUESTION_KEYWORDS)
_SYNTHESIS_RE = _word_pattern(QUESTION_KEYWORDS + SYNTHESIS_SUMMARY_WORDS + COMPARISON_WORDS)


def classify(query: str) -> QueryType:
    """
    Map raw query text to a QueryType. Summary keywords are checked before
    question keywords, so "how much" wins over a bare "how".
    """
    text = query or ""
    if _SUMMARY_RE.search(text):
        return QueryType.AGGREGATE_SUMMARY
    if _QUESTION_RE.search(text) or "?" in text:
        return QueryType.OPEN_QUESTION
    return QueryType.LEXICAL_SEARCH


def is_synthesis_worthy(query: str) -> bool:
    """True for questions, totals, comparisons and anything longer than a few words."""
    text = (query or "").strip()
    if not text:
        return False
    if _SYNTHESIS_RE.search(text) or "?" in text:
        return True
    return len(text.split()) > MAX_TERSE_WORDS


def needs_synthesis(query: str, query_type: QueryType) -> bool:
    return query_type is not QueryType.LEXICAL_SEARCH or is_synthesis_worthy(query)
