"""
Navigation Targets

URL construction for timeline pages and the two page-level collaborators
the widgets talk to:

- Navigator: performs a page navigation (location change)
- AddressBar: the addressable query state (timeline_year) that survives
  reload and back/forward

The URL scheme is owned by the routing collaborator; this module only
builds the strings.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlencode

from .contracts.base import FictionalDate, YearPolicy, validate_month
from .temporal.calendar import (
    day_title, disallowed_year_tooltip, is_year_allowed, next_day, previous_day,
)


YEAR_PARAM = 'timeline_year'


def overview_url() -> str:
    return "/timeline/"


def year_url(year: int) -> str:
    return f"/timeline/{year}/"


def month_url(year: int, month: int) -> str:
    return f"/timeline/{year}/{validate_month(month)}/"


def day_url(year: int, month: int, day: int) -> str:
    return f"/timeline/{year}/{validate_month(month)}/{day}/"


def article_url(year: int, month: int, day: int, slug: str) -> str:
    return f"/timeline/{year}/{validate_month(month)}/{day}/{slug}/"


def fallback_permalink(article_id: int) -> str:
    """Store default permalink for articles without a complete timeline date."""
    return f"/?p={article_id}"


# =============================================================================
# DAY ADJACENCY LINKS
# =============================================================================

@dataclass(frozen=True)
class AdjacentDayLink:
    """Previous/next day link; disabled when the target year is not allowed."""
    date: FictionalDate
    url: str
    label: str
    enabled: bool
    tooltip: Optional[str]


def adjacent_day_links(date: FictionalDate, policy: YearPolicy) -> Tuple[AdjacentDayLink, AdjacentDayLink]:
    links = []
    for target in (previous_day(date), next_day(date)):
        allowed = is_year_allowed(target.year, policy)
        links.append(AdjacentDayLink(
            date=target,
            url=day_url(target.year, target.month, target.day),
            label=day_title(target.day, target.month, target.year),
            enabled=allowed,
            tooltip=None if allowed else disallowed_year_tooltip(target.year),
        ))
    return links[0], links[1]


# =============================================================================
# PAGE COLLABORATORS
# =============================================================================

class Navigator:
    """Performs page navigation. Records history so callers can inspect it."""

    def __init__(self):
        self.visited: List[str] = []

    def go(self, url: str) -> None:
        self.visited.append(url)

    @property
    def current(self) -> Optional[str]:
        return self.visited[-1] if self.visited else None


@dataclass
class AddressBar:
    """
    Addressable page state.

    push() adds a history entry, like history.pushState with a new query.
    """
    path: str = "/"
    params: Dict[str, str] = field(default_factory=dict)
    history: List[str] = field(default_factory=list)

    def get(self, name: str) -> Optional[str]:
        return self.params.get(name)

    def push(self, **params) -> str:
        self.params.update({k: str(v) for k, v in params.items()})
        url = self.url
        self.history.append(url)
        return url

    @property
    def url(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"
