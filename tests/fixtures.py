"""
Test Fixtures

Explicit article sets and client stand-ins for timeline calendar tests.

RULES:
======
1. No randomness; every scenario is spelled out
2. ScriptedClient parks each request on a future the test resolves,
   so completion order is chosen by the test
3. Store-backed clients go through the real HTTP stack (ASGI transport)
"""

from __future__ import annotations
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

import httpx

from timeline_calendar.access.client import ArticleStoreClient
from timeline_calendar.config import TimelineConfig
from timeline_calendar.contracts import (
    ArticleSummary, MonthCount, SparklineDataset, TimeOfDay, YearPolicy,
)
from timeline_store import ArticleStore, StoredArticle
from timeline_store.api.server import create_app


BASE_URL = "http://store.test"


def run(coro):
    return asyncio.run(coro)


def article(id: int, title: str, day: int, time_of_day: Optional[TimeOfDay] = None) -> ArticleSummary:
    return ArticleSummary(
        id=id, title=title, permalink=f"/timeline/1/1/{day}/{title.lower()}/",
        day=day, time_of_day=time_of_day,
    )


def dataset(mapping: dict) -> SparklineDataset:
    """{year: {month: count}} -> SparklineDataset (absent months are zero)."""
    return SparklineDataset.from_mapping({y: MonthCount.from_mapping(m) for y, m in mapping.items()})


# =============================================================================
# SCRIPTED CLIENT
# =============================================================================

@dataclass
class PendingCall:
    endpoint: str
    args: Tuple[Any, ...]
    future: asyncio.Future

    def resolve(self, value: Any) -> None:
        self.future.set_result(value)


class ScriptedClient:
    """
    Duck-typed ArticleStoreClient whose responses are released by the test.
    """

    def __init__(self):
        self.calls: List[PendingCall] = []

    def _park(self, endpoint: str, *args) -> asyncio.Future:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(PendingCall(endpoint, args, future))
        return future

    async def fetch_range_counts(self, start_year: int, end_year: int):
        return await self._park('range', start_year, end_year)

    async def fetch_month_articles(self, year: int, month: int):
        return await self._park('month', year, month)

    async def fetch_years(self):
        return await self._park('years')

    def pending(self, endpoint: str) -> List[PendingCall]:
        return [c for c in self.calls if c.endpoint == endpoint and not c.future.done()]


async def settle() -> None:
    """Let every ready task run up to its next suspension point."""
    for _ in range(5):
        await asyncio.sleep(0)


# =============================================================================
# HTTP-BACKED CLIENTS
# =============================================================================

def mock_client(handler: Callable[[httpx.Request], httpx.Response], config: Optional[TimelineConfig] = None) -> ArticleStoreClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return ArticleStoreClient(config or TimelineConfig(base_url=BASE_URL), http=http)


def store_client(store: ArticleStore) -> ArticleStoreClient:
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=create_app(store)), base_url=BASE_URL)
    return ArticleStoreClient(TimelineConfig(base_url=BASE_URL), http=http)


def sample_store(policy: Optional[YearPolicy] = None, **kwargs) -> ArticleStore:
    """
    Year 3, August: two articles on the 1st, one on the 15th.
    Year -1, March: two articles on the 6th.
    Year 0, May: one article (hidden unless year zero is allowed).
    Year 10, January: one article.
    """
    return ArticleStore([
        StoredArticle(1, "Harbor Fire", "harbor-fire", 3, 8, 1, TimeOfDay.EVENING),
        StoredArticle(2, "Council Vote", "council-vote", 3, 8, 1),
        StoredArticle(3, "Eclipse", "eclipse", 3, 8, 15, TimeOfDay.NIGHT),
        StoredArticle(4, "Old Treaty", "old-treaty", -1, 3, 6),
        StoredArticle(5, "Border Skirmish", "border-skirmish", -1, 3, 6, TimeOfDay.MORNING),
        StoredArticle(6, "Founding", "founding", 0, 5, 2),
        StoredArticle(7, "Comet", "comet", 10, 1, 20),
        StoredArticle(8, "Draft", "draft", 3, 8, 2, published=False),
    ], policy=policy or YearPolicy(allow_year_zero=True, allow_negative_years=True), **kwargs)


# =============================================================================
# IMMEDIATE CLIENT
# =============================================================================

class StaticClient:
    """
    Duck-typed ArticleStoreClient answering at once from fixed data.

    range_counts is sliced to the requested span; set fail_ranges to make
    range fetches degrade (None).
    """

    def __init__(self, months=None, range_counts=None, years=None):
        self.months = months or {}
        self.range_counts = range_counts or {}
        self.years = years
        self.fail_ranges = False
        self.requests: List[Tuple[Any, ...]] = []

    async def fetch_month_articles(self, year: int, month: int):
        self.requests.append(('month', year, month))
        return list(self.months.get((year, month), []))

    async def fetch_range_counts(self, start_year: int, end_year: int):
        self.requests.append(('range', start_year, end_year))
        if self.fail_ranges:
            return None
        return dataset({y: m for y, m in self.range_counts.items() if start_year <= y <= end_year})

    async def fetch_years(self):
        self.requests.append(('years',))
        return None if self.years is None else list(self.years)
