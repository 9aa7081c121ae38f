# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-09-24
# Description: main.py
# -----------------------------------------------------------------------------
from fastapi import FastAPI

from api.routers import embeddings, health, search
from utility.logging_utils import get_logger

logger = get_logger("api")

app = FastAPI(title="Receipt Smart Search API")
app.include_router(health.router)
app.include_router(search.router)
app.include_router(embeddings.router)

logger.info("API routers registered: health, search, embeddings")
