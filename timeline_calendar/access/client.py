"""
Article Store Client

Async HTTP access to the three read endpoints of the Article Store.

PRINCIPLES:
===========
1. One request per call; no retries
2. Transport and decode failures become Error records, never exceptions
3. Month fetch failures degrade to an empty list
4. Range and year fetch failures return None so callers keep prior state
"""

from __future__ import annotations
from typing import Any, List, Optional, Tuple
import logging

import httpx
from pydantic import ValidationError

from ..config import TimelineConfig
from ..contracts.base import Error, ErrorCode, validate_month
from ..contracts.content import ArticleSummary, SparklineDataset
from .wire import decode_articles, decode_range_counts, decode_years

logger = logging.getLogger(__name__)


ARTICLES_PATH = "/api/v1/articles"
RANGE_COUNTS_PATH = "/api/v1/sparkline"
YEARS_PATH = "/api/v1/years"


class ArticleStoreClient:
    """
    Reads articles, per-month counts and distinct years from the store.

    GUARANTEES:
    ===========
    - Never raises on network or payload problems
    - Every degradation is logged and recorded in `errors`
    - Callers must not build invalid requests (month outside 1..12,
      start > end); those raise ValueError before any I/O
    """

    def __init__(
        self,
        config: Optional[TimelineConfig] = None,
        http: Optional[httpx.AsyncClient] = None
    ):
        self._config = config or TimelineConfig()
        self._http = http
        self._owns_http = http is None
        self._errors: List[Error] = []

    async def __aenter__(self) -> 'ArticleStoreClient':
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.request_timeout,
                headers={'Accept': 'application/json'},
            )
        return self._http

    @property
    def errors(self) -> Tuple[Error, ...]:
        return tuple(self._errors)

    # =========================================================================
    # ENDPOINTS
    # =========================================================================

    async def fetch_month_articles(self, year: int, month: int) -> List[ArticleSummary]:
        validate_month(month)
        payload, error = await self._get_json(ARTICLES_PATH, {'year': year, 'month': month})
        if error is None:
            try:
                return decode_articles(payload)
            except (ValidationError, ValueError, TypeError) as e:
                error = Error(ErrorCode.MALFORMED_PAYLOAD, str(e))
        self._record(error.with_context('year', str(year)).with_context('month', str(month)), ARTICLES_PATH)
        return []

    async def fetch_range_counts(self, start_year: int, end_year: int) -> Optional[SparklineDataset]:
        if start_year > end_year:
            raise ValueError(f"Invalid year range: start {start_year} > end {end_year}")
        payload, error = await self._get_json(
            RANGE_COUNTS_PATH, {'start_year': start_year, 'end_year': end_year}
        )
        if error is None:
            try:
                dataset = decode_range_counts(payload)
                if dataset is not None:
                    return dataset
                error = Error(ErrorCode.UNSUCCESSFUL_RESPONSE, "store reported success=false")
            except (ValidationError, ValueError, TypeError) as e:
                error = Error(ErrorCode.MALFORMED_PAYLOAD, str(e))
        self._record(
            error.with_context('start_year', str(start_year)).with_context('end_year', str(end_year)),
            RANGE_COUNTS_PATH,
        )
        return None

    async def fetch_years(self) -> Optional[List[int]]:
        payload, error = await self._get_json(YEARS_PATH, {})
        if error is None:
            try:
                return decode_years(payload)
            except (ValidationError, ValueError, TypeError) as e:
                error = Error(ErrorCode.MALFORMED_PAYLOAD, str(e))
        self._record(error, YEARS_PATH)
        return None

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    async def _get_json(self, path: str, params: dict) -> Tuple[Any, Optional[Error]]:
        try:
            response = await self._client().get(path, params=params)
        except httpx.HTTPError as e:
            return None, Error(ErrorCode.TRANSPORT_FAILED, f"{type(e).__name__}: {e}")

        if response.status_code != 200:
            return None, Error(ErrorCode.HTTP_STATUS, f"HTTP {response.status_code}")

        try:
            return response.json(), None
        except ValueError as e:
            return None, Error(ErrorCode.MALFORMED_PAYLOAD, f"invalid JSON: {e}")

    def _record(self, error: Error, path: str) -> None:
        self._errors.append(error)
        logger.warning("Article store request %s degraded: %s", path, error.describe())
