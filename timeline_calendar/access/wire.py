"""
Wire Schemas

Pydantic models for the three Article Store payloads. Both the client
(decode) and the reference store (response models) use them, so the two
sides cannot drift.

Month articles:  [{id, title, permalink, timeline_day, timeline_time_of_day?}]
Range counts:    {success, data: {year: {month: count}}}
Distinct years:  ["-1", "0", "3", ...]
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..contracts.base import TimeOfDay
from ..contracts.content import ArticleSummary, MonthCount, SparklineDataset


class ArticleRecord(BaseModel):
    """One article as listed by the month endpoint."""
    model_config = ConfigDict(extra='ignore')

    id: int
    title: str
    permalink: str
    timeline_day: int
    timeline_time_of_day: Optional[str] = None
    timeline_year: Optional[int] = None
    timeline_month: Optional[int] = None

    def to_summary(self) -> ArticleSummary:
        return ArticleSummary(
            id=self.id,
            title=self.title,
            permalink=self.permalink,
            day=self.timeline_day,
            time_of_day=TimeOfDay.parse(self.timeline_time_of_day),
        )


class RangeCountsResponse(BaseModel):
    """Envelope of the range endpoint. data is only meaningful when success."""
    success: bool
    data: Any = None


class RangeCountsData(BaseModel):
    years: Dict[int, Dict[int, int]] = Field(default_factory=dict)

    def to_dataset(self) -> SparklineDataset:
        return SparklineDataset.from_mapping(
            {year: MonthCount.from_mapping(months) for year, months in self.years.items()}
        )


ARTICLE_LIST = TypeAdapter(List[ArticleRecord])
COUNTS_MAPPING = TypeAdapter(Dict[int, Dict[int, int]])
YEAR_LIST = TypeAdapter(List[int])


def decode_articles(payload: Any) -> List[ArticleSummary]:
    return [record.to_summary() for record in ARTICLE_LIST.validate_python(payload)]


def decode_range_counts(payload: Any) -> Optional[SparklineDataset]:
    """Dataset on success; None when the store reports success=false."""
    envelope = RangeCountsResponse.model_validate(payload)
    if not envelope.success:
        return None
    data = RangeCountsData(years=COUNTS_MAPPING.validate_python(envelope.data or {}))
    return data.to_dataset()


def decode_years(payload: Any) -> List[int]:
    return sorted(set(YEAR_LIST.validate_python(payload)))
