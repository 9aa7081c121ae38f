# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Updated: 2026-09-23
# Description: TestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.ReceiptEmbedder import ReceiptEmbedder
from store.ReceiptStore import ReceiptStore
from utility.logging_utils import get_class_logger
from vectorstore.ReceiptVectorStore import ReceiptVectorStore


class TestRunner:
    """
    Orchestrates smoke tests and reports a consolidated result.

    Tests included:
      - receipt_store   (SQLite reachable)
      - vector_store    (Chroma collection reachable)
      - embedding_config / chat_config (credentials present)
      - embedding_live / chat_live (real API round-trip, only when requested)
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        cfg: Config,
        *,
        store: ReceiptStore,
        vector_store: ReceiptVectorStore,
        embedder: ReceiptEmbedder,
        chat_client: OpenAIChat,
        logger: Optional[logging.Logger] = None,
    ):
        self.cfg = cfg
        self.store = store
        self.vector_store = vector_store
        self.embedder = embedder
        self.chat_client = chat_client
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    def run_all(self, run_live: bool = False) -> Dict[str, bool]:
        """
        Run all configured smoke tests.

        :param run_live: If True, also calls the embedding and chat APIs.
        :return: Dict mapping test names to True/False.
        """
        self.logger.info("Starting smoke test suite (run_live=%s)", run_live)

        checks: Dict[str, Callable[[], bool]] = {
            "receipt_store": self.store.test_connection,
            "vector_store": self.vector_store.test_connection,
            "embedding_config": lambda: not self.cfg.missing(*Config.EMBEDDING_FIELDS),
            "chat_config": lambda: not self.cfg.missing(*Config.CHAT_FIELDS),
        }
        if run_live:
            checks["embedding_live"] = lambda: self.embedder.embed_text("receipt embedding healthcheck").ok
            checks["chat_live"] = self.chat_client.healthcheck

        results: Dict[str, bool] = {}
        for name, check in checks.items():
            try:
                ok = bool(check())
            except Exception as e:
                self.logger.exception("%s raised an exception: %s", name, e)
                ok = False
            results[name] = ok
            self._log_result(name, ok)

        self._log_summary(results)
        return results

    # -------------------------------------------------------------------------
    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    def _log_summary(self, results: Dict[str, bool]) -> None:
        total = len(results)
        passed = sum(1 for v in results.values() if v)
        failed = total - passed

        self.logger.info("Smoke test summary: %d total, %d passed, %d failed", total, passed, failed)
