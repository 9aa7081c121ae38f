# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-09-23
# Description: HealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass

from health.TestRunner import TestRunner
from api.schemas.health import DeepHealthResponse, SmokeTestSummary


@dataclass
class HealthService:
    """
    Wraps TestRunner, which runs smoke tests against the record store,
    the vector index and the OpenAI configuration.
    Returns DeepHealthResponse for API layer
    """

    test_runner: TestRunner

    def deep_health(self, run_live: bool = False) -> DeepHealthResponse:
        results = self.test_runner.run_all(run_live=run_live)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        # Store + index are required; missing OpenAI only degrades search
        required = ("receipt_store", "vector_store")
        if failed == 0:
            overall_status = "ok"
        elif all(results.get(name, False) for name in required):
            overall_status = "degraded"
        else:
            overall_status = "error"

        return DeepHealthResponse(
            status=overall_status,
            results=results,
            summary=SmokeTestSummary(total=total, passed=passed, failed=failed),
            config=self.test_runner.cfg.summary(),
        )
