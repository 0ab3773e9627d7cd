"""
In-Memory Article Store

Dated articles and the three aggregate queries over them.

The store applies its own year-zero filter to range counts and the year
list. Widgets filter again at render time; the two layers are
independent and either may be switched off.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import json

from timeline_calendar.access.wire import ArticleRecord
from timeline_calendar.contracts.base import (
    TimeOfDay, YearPolicy, YearRange,
)
from timeline_calendar.navigation import article_url, fallback_permalink


@dataclass(frozen=True)
class StoredArticle:
    """
    A published article. year/month/day may be missing for articles that
    were never dated; those have no timeline permalink.
    """
    id: int
    title: str
    slug: str
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    time_of_day: Optional[TimeOfDay] = None
    published: bool = True

    def __post_init__(self):
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"Article {self.id}: month {self.month} out of range")
        if self.day is not None and not 1 <= self.day <= 31:
            raise ValueError(f"Article {self.id}: day {self.day} out of range")

    @property
    def is_dated(self) -> bool:
        return self.year is not None and bool(self.month) and bool(self.day)

    @property
    def permalink(self) -> str:
        if self.is_dated:
            return article_url(self.year, self.month, self.day, self.slug)
        return fallback_permalink(self.id)

    def to_record(self) -> ArticleRecord:
        return ArticleRecord(
            id=self.id,
            title=self.title,
            permalink=self.permalink,
            timeline_day=self.day or 0,
            timeline_time_of_day=self.time_of_day.value if self.time_of_day else None,
            timeline_year=self.year,
            timeline_month=self.month,
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'StoredArticle':
        def _opt_int(key):
            value = data.get(key)
            return None if value in (None, "") else int(value)

        return cls(
            id=int(data['id']),
            title=str(data['title']),
            slug=str(data.get('slug') or data['id']),
            year=_opt_int('year'),
            month=_opt_int('month'),
            day=_opt_int('day'),
            time_of_day=TimeOfDay.parse(data.get('time_of_day')),
            published=bool(data.get('published', True)),
        )


class ArticleStore:
    """
    Read-mostly article collection.

    filter_year_zero: drop year 0 from range counts and the year list
    when the policy does not allow it.
    """

    # Largest span the range query will zero-fill.
    MAX_RANGE_SPAN = 1000

    def __init__(
        self,
        articles: Iterable[StoredArticle] = (),
        policy: Optional[YearPolicy] = None,
        filter_year_zero: bool = True,
    ):
        self._articles: Dict[int, StoredArticle] = {}
        self._policy = policy or YearPolicy()
        self._filter_year_zero = filter_year_zero
        for article in articles:
            self.add(article)

    @classmethod
    def load(cls, path: Path, policy: Optional[YearPolicy] = None, **kwargs) -> 'ArticleStore':
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        items = data.get('articles', []) if isinstance(data, dict) else data
        return cls((StoredArticle.from_dict(item) for item in items), policy=policy, **kwargs)

    def add(self, article: StoredArticle) -> None:
        self._articles[article.id] = article

    def __len__(self) -> int:
        return len(self._articles)

    def _published(self) -> List[StoredArticle]:
        return [a for a in self._articles.values() if a.published]

    def _hides_year(self, year: int) -> bool:
        return self._filter_year_zero and year == 0 and not self._policy.allow_year_zero

    # =========================================================================
    # QUERIES
    # =========================================================================

    def month_articles(self, year: int, month: int) -> List[StoredArticle]:
        return sorted(
            (a for a in self._published() if a.year == year and a.month == month),
            key=lambda a: a.id,
        )

    def same_day_articles(self, month: int, day: int) -> List[StoredArticle]:
        """Articles on one month/day in every year (this day in history), by title."""
        return sorted(
            (a for a in self._published() if a.month == month and a.day == day),
            key=lambda a: (a.title.casefold(), a.id),
        )

    def range_counts(self, year_range: YearRange) -> Dict[int, Dict[int, int]]:
        """Every year of the range with 12 zero-filled months, then counts."""
        if len(year_range) > self.MAX_RANGE_SPAN:
            raise ValueError(f"Range spans {len(year_range)} years; limit is {self.MAX_RANGE_SPAN}")
        counts: Dict[int, Dict[int, int]] = {
            year: {month: 0 for month in range(1, 13)}
            for year in year_range.years()
            if not self._hides_year(year)
        }
        for article in self._published():
            if article.year in counts and article.month:
                counts[article.year][article.month] += 1
        return counts

    def distinct_years(self) -> List[int]:
        years = {a.year for a in self._published() if a.year is not None}
        return sorted(y for y in years if not self._hides_year(y))

