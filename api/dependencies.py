# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-09-24
# Description: dependencies.py
# -----------------------------------------------------------------------------
from api.AppContainer import get_app_container
from services.EmbeddingIndexer import EmbeddingIndexer
from services.HealthService import HealthService
from services.SmartSearchOrchestrator import SmartSearchOrchestrator


def get_health_service() -> HealthService:
    # use the singleton service from the container
    return get_app_container().health_service


def get_search_service() -> SmartSearchOrchestrator:
    # use the singleton service from the container
    return get_app_container().search_service


def get_indexer() -> EmbeddingIndexer:
    return get_app_container().indexer
