"""
Timeline Article Store: Read API
================================

Read-only HTTP surface over the in-memory ArticleStore.

Endpoints:
- GET /api/v1/articles?year=&month=          -> [ArticleRecord]
- GET /api/v1/sparkline?start_year=&end_year= -> {success, data}
- GET /api/v1/years                          -> ["-1", "0", ...]
- GET /api/v1/this-day?month=&day=            -> [ArticleRecord]
- GET /health

Usage:
    uvicorn timeline_store.api.server:app --reload
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional
import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from timeline_calendar.access.client import ARTICLES_PATH, RANGE_COUNTS_PATH, YEARS_PATH
from timeline_calendar.access.wire import ArticleRecord, RangeCountsResponse
from timeline_calendar.config import TimelineConfig
from timeline_calendar.contracts.base import YearRange

from ..store import ArticleStore

logger = logging.getLogger(__name__)

SAME_DAY_PATH = "/api/v1/this-day"


def create_app(store: Optional[ArticleStore] = None) -> FastAPI:
    """
    Build the API around a store.

    Without a store, one is loaded at startup from TIMELINE_STORE_DATA
    (JSON) or left empty, using the policy from TIMELINE_* settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, 'store', None) is None:
            policy = TimelineConfig.from_env().policy()
            data_path = os.environ.get("TIMELINE_STORE_DATA")
            if data_path:
                logger.info("Loading articles from %s", data_path)
                app.state.store = ArticleStore.load(Path(data_path), policy=policy)
            else:
                app.state.store = ArticleStore(policy=policy)
            logger.info("Article store ready with %d articles", len(app.state.store))
        yield
        logger.info("Shutting down article store")

    app = FastAPI(
        title="Timeline Article Store",
        version="1.0.0",
        description="Read endpoints for the timeline calendar",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],  # read-only
        allow_headers=["*"],
    )

    def _store() -> ArticleStore:
        if app.state.store is None:
            raise HTTPException(status_code=503, detail="Store not initialized")
        return app.state.store

    # =========================================================================
    # ENDPOINTS
    # =========================================================================

    @app.get("/health")
    async def health_check():
        return {"status": "online", "articles": len(_store())}

    @app.get(ARTICLES_PATH, response_model=List[ArticleRecord])
    async def get_month_articles(year: int = 0, month: int = 1):
        """Articles of one month. Empty for unknown months."""
        if not 1 <= month <= 12:
            return []
        return [a.to_record() for a in _store().month_articles(year, month)]

    @app.get(RANGE_COUNTS_PATH, response_model=RangeCountsResponse)
    async def get_range_counts(start_year: int = 1, end_year: int = 8):
        """Per-month counts for every year of an inclusive range."""
        try:
            counts = _store().range_counts(YearRange(start_year, end_year))
        except ValueError as e:
            logger.warning("Rejected range %s..%s: %s", start_year, end_year, e)
            return RangeCountsResponse(success=False, data=str(e))
        return RangeCountsResponse(success=True, data=counts)

    @app.get(SAME_DAY_PATH, response_model=List[ArticleRecord])
    async def get_same_day_articles(month: int, day: int):
        """Articles dated on one month/day in any year, ordered by title."""
        if not 1 <= month <= 12:
            return []
        return [a.to_record() for a in _store().same_day_articles(month, day)]

    @app.get(YEARS_PATH, response_model=List[str])
    async def get_years():
        """Distinct years with articles, ascending by value, as strings."""
        return [str(year) for year in _store().distinct_years()]

    return app


app = create_app()
