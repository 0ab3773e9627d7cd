"""
Content Contracts

Read-only shapes of what the Article Store returns.

- ArticleSummary: one dated article, as listed for a month
- MonthCount: article counts for the 12 months of one year
- SparklineDataset: MonthCount per year for one fetched range

A dataset is replaced wholesale on re-fetch; there is no merging.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Tuple, Union

from .base import TimeOfDay, validate_month


@dataclass(frozen=True)
class ArticleSummary:
    """An article as listed in a month. Never mutated by widgets."""
    id: int
    title: str
    permalink: str
    day: int
    time_of_day: Optional[TimeOfDay] = None


@dataclass(frozen=True)
class MonthCount:
    """Non-negative article counts indexed by month number (1..12)."""
    counts: Tuple[int, ...] = (0,) * 12

    def __post_init__(self):
        if len(self.counts) != 12:
            raise ValueError(f"MonthCount needs 12 entries, got {len(self.counts)}")
        if any(c < 0 for c in self.counts):
            raise ValueError("Article counts cannot be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[Union[int, str], int]) -> MonthCount:
        """Build from a {month: count} mapping; absent months count zero."""
        counts = [0] * 12
        for key, value in data.items():
            month = validate_month(int(key))
            counts[month - 1] = int(value)
        return cls(tuple(counts))

    def __getitem__(self, month: int) -> int:
        return self.counts[validate_month(month) - 1]

    @property
    def total(self) -> int:
        return sum(self.counts)

    @property
    def peak(self) -> int:
        return max(self.counts)


@dataclass(frozen=True)
class SparklineDataset:
    """
    Per-year month counts for one fetched range.

    Years are kept as integer keys in ascending order. The dataset is the
    unfiltered backend view: render-time filters (year zero) do not
    mutate it, so global_max is computed over every year it holds.
    """
    entries: Tuple[Tuple[int, MonthCount], ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, data: Mapping[Union[int, str], Mapping]) -> SparklineDataset:
        entries = [
            (int(year), months if isinstance(months, MonthCount) else MonthCount.from_mapping(months))
            for year, months in data.items()
        ]
        entries.sort(key=lambda item: item[0])
        return cls(tuple(entries))

    def __iter__(self) -> Iterator[Tuple[int, MonthCount]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, year: int) -> bool:
        return any(y == year for y, _ in self.entries)

    def years(self) -> Tuple[int, ...]:
        return tuple(year for year, _ in self.entries)

    def get(self, year: int) -> Optional[MonthCount]:
        for y, months in self.entries:
            if y == year:
                return months
        return None

    @property
    def global_max(self) -> int:
        """Largest single month count across every loaded year (0 if empty)."""
        return max((months.peak for _, months in self.entries), default=0)

    def has_content_after(self, year: int) -> bool:
        """Whether any loaded year strictly beyond `year` has a non-zero month."""
        return any(y > year and months.total > 0 for y, months in self.entries)
