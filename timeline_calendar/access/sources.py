"""
Latest-Wins Data Sources

Widget-owned state holders wrapping the client. Each request is tagged
with a monotonically increasing ticket; when a response resolves, it is
applied only if its ticket is still the newest one issued.

ORDERING GUARANTEE:
===================
If request A is superseded by request B before A resolves, A's result is
discarded no matter which resolves first. Discarding happens at this
layer; the transport request is allowed to finish in the background.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional, Tuple
import logging

from ..contracts.base import YearRange
from ..contracts.content import ArticleSummary, SparklineDataset
from .client import ArticleStoreClient

logger = logging.getLogger(__name__)


class LoadOutcome(Enum):
    """What a completed load did to the source's state."""
    APPLIED = "applied"
    FAILED = "failed"           # prior state kept
    SUPERSEDED = "superseded"   # newer request issued meanwhile


class LatestWinsGate:
    """Issues tickets; only the most recent ticket is current."""

    def __init__(self):
        self._issued = 0

    def issue(self) -> int:
        self._issued += 1
        return self._issued

    def is_current(self, ticket: int) -> bool:
        return ticket == self._issued


class RangeCountsSource:
    """
    Cached SparklineDataset for one widget.

    - A failed fetch keeps the previous dataset (stale but valid)
    - A successful fetch replaces the dataset wholesale
    - global_max is recomputed after every applied fetch
    """

    def __init__(self, client: ArticleStoreClient):
        self._client = client
        self._gate = LatestWinsGate()
        self._dataset = SparklineDataset()
        self._global_max = 0

    @property
    def dataset(self) -> SparklineDataset:
        return self._dataset

    @property
    def global_max(self) -> int:
        return self._global_max

    async def load(self, year_range: YearRange) -> LoadOutcome:
        ticket = self._gate.issue()
        dataset = await self._client.fetch_range_counts(year_range.start, year_range.end)

        if not self._gate.is_current(ticket):
            logger.debug("Discarding superseded range counts for %s..%s", year_range.start, year_range.end)
            return LoadOutcome.SUPERSEDED

        if dataset is None:
            return LoadOutcome.FAILED

        self._dataset = dataset
        self._global_max = dataset.global_max
        return LoadOutcome.APPLIED


class MonthArticlesSource:
    """
    Latest-wins month article list, one per popup or grid instance.

    Failed fetches degrade to an empty list (already done by the client),
    so a non-superseded load always applies.
    """

    def __init__(self, client: ArticleStoreClient):
        self._client = client
        self._gate = LatestWinsGate()
        self._articles: Tuple[ArticleSummary, ...] = ()

    @property
    def articles(self) -> Tuple[ArticleSummary, ...]:
        return self._articles

    async def load(self, year: int, month: int) -> LoadOutcome:
        ticket = self._gate.issue()
        articles = await self._client.fetch_month_articles(year, month)

        if not self._gate.is_current(ticket):
            logger.debug("Discarding superseded articles for %s/%s", year, month)
            return LoadOutcome.SUPERSEDED

        self._articles = tuple(articles)
        return LoadOutcome.APPLIED


class YearListSource:
    """Distinct years with content, loaded once."""

    def __init__(self, client: ArticleStoreClient):
        self._client = client
        self._years: Optional[List[int]] = None

    @property
    def years(self) -> List[int]:
        return list(self._years or [])

    async def load(self, fallback_year: int) -> LoadOutcome:
        years = await self._client.fetch_years()
        if years is None:
            self._years = [fallback_year]
            return LoadOutcome.FAILED
        self._years = years
        return LoadOutcome.APPLIED
