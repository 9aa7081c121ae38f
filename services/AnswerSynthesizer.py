# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-27
# Updated: 2026-09-20
# Description: AnswerSynthesizer.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, List, Optional, Sequence

from chat.OpenAIChat import OpenAIChat
from common.Errors import ConfigurationError
from prompts.PromptTemplates import template_for
from receipt.types import AnswerResult, QueryType, SearchResult
from utility.logging_utils import get_class_logger


def _or_default(x: Any, default: str) -> str:
    if x is None:
        return default
    s = str(x).strip()
    return s or default


def format_amount(amount: Optional[float]) -> str:
    # A missing amount must not read as a zero spend in summaries
    if amount is None:
        return "Unknown"
    return f"${float(amount):,.2f}"


class AnswerSynthesizer:
    """
    Answer synthesis:
        - formats retrieved receipts into a grounding context
        - picks the prompt pair for the query type
        - calls the completion client with a low temperature
        - returns AnswerResult, or None when there is no usable answer
    """

    def __init__(
            self,
            *,
            chat_client: OpenAIChat,
            temperature: float = 0.3,
            max_tokens: int = 500,
            max_context_chars: int = 12_000,
            logger: logging.Logger | None = None,
    ) -> None:
        self.chat_client = chat_client
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_context_chars = max_context_chars
        self.logger = logger or get_class_logger(self.__class__)

    def synthesize(
            self,
            query: str,
            results: Sequence[SearchResult],
            query_type: QueryType,
    ) -> Optional[AnswerResult]:
        if not results:
            return None

        template = template_for(query_type)
        context = self.build_context_block(results)

        self.logger.info(
            "synthesize: query='%s' type=%s results=%d context_chars=%d (start)",
            query[:120], query_type.value, len(results), len(context),
        )

        try:
            outcome = self.chat_client.complete(
                system_prompt=template.system_prompt(),
                user_prompt=template.user_prompt(query, context),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except ConfigurationError as e:
            # Missing chat credentials only cost the answer, never the results
            self.logger.warning("synthesize: chat not configured: %s", e)
            return None
        except Exception as e:
            self.logger.error("synthesize: completion call raised: %s", e, exc_info=True)
            return None

        if not outcome.ok:
            self.logger.warning("synthesize: no answer (%s: %s)", outcome.kind, outcome.message)
            return None

        self.logger.info("synthesize: answer_chars=%d (done)", len(outcome.data))
        return AnswerResult(text=outcome.data, query_type=query_type)

    def build_context_block(self, results: Sequence[SearchResult]) -> str:
        """
        One "Receipt N:" block per result, separated by blank lines.
        """
        parts: List[str] = []
        total = 0

        for i, r in enumerate(results, start=1):
            block = (
                f"Receipt {i}:\n"
                f"- Product: {_or_default(r.title, 'Unknown')}\n"
                f"- Brand: {_or_default(r.brand, 'Unknown')}\n"
                f"- Store: {_or_default(r.store, 'Unknown')}\n"
                f"- Location: {_or_default(r.location, 'Unknown')}\n"
                f"- Date: {_or_default(r.purchase_date, 'Unknown')}\n"
                f"- Amount: {format_amount(r.amount)}\n"
                f"- Warranty: {_or_default(r.warranty_period, 'Unknown')}\n"
                f"- Model: {_or_default(r.model, 'N/A')}\n"
                f"- Country: {_or_default(r.country, 'Unknown')}"
            )

            if parts and total + len(block) > self.max_context_chars:
                self.logger.warning(
                    "build_context_block: truncating context at %d chars (limit=%d)",
                    total,
                    self.max_context_chars,
                )
                break

            parts.append(block)
            total += len(block) + 2

        return "\n\n".join(parts)
