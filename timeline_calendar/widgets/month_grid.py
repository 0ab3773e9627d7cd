"""
Month Grid Widget

One fictional month as a 7-column grid with per-day article badges.

STATES:
=======
Idle -> Loading -> Rendered, re-entering Loading on month/year navigation
or when the year switcher pushes a new year.

Navigation buttons move month (wrapping 12 <-> 1 with the year) or year,
without checking the year policy. In static mode (embedded in a year
view) there are no navigation controls; rendering and hover previews
remain.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..access.client import ArticleStoreClient
from ..access.sources import LoadOutcome, MonthArticlesSource
from ..contracts.base import DEFAULT_REFERENCE_YEAR, validate_month
from ..contracts.content import ArticleSummary
from ..interaction.events import (
    Background, DayCell, Direction, EventResult, IGNORED, NavButton, NavScope,
    PointerEvent, PointerKind, Target,
)
from ..interaction.geometry import Rect
from ..interaction.popup import PopupRequest, PreviewPopup
from ..navigation import Navigator, day_url
from ..temporal.calendar import days_in_month, first_day_of_week, month_title, shift_month


class GridPhase(Enum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"


@dataclass(frozen=True)
class GridCell:
    """A leading blank (day None) or a day of the month."""
    day: Optional[int]
    article_count: int = 0
    target: Target = Background()

    @property
    def has_badge(self) -> bool:
        return self.article_count > 0


@dataclass(frozen=True)
class MonthGridView:
    year: int
    month: int
    title: str
    cells: Tuple[GridCell, ...]
    nav_buttons: Tuple[NavButton, ...]

    @property
    def leading_blanks(self) -> int:
        return sum(1 for c in self.cells if c.day is None)

    def cell_for(self, day: int) -> GridCell:
        for cell in self.cells:
            if cell.day == day:
                return cell
        raise KeyError(day)


_NAV_BUTTONS = (
    NavButton(Direction.PREV, NavScope.YEAR),
    NavButton(Direction.PREV, NavScope.MONTH),
    NavButton(Direction.NEXT, NavScope.MONTH),
    NavButton(Direction.NEXT, NavScope.YEAR),
)


class MonthGrid:
    """
    Month grid bound to one article source.

    The day popup is shared by every grid on a page; day previews need no
    fetch because the grid already holds the month's articles.
    """

    def __init__(
        self,
        client: ArticleStoreClient,
        popup: PreviewPopup,
        navigator: Navigator,
        year: int = 0,
        month: int = 1,
        static: bool = False,
        reference_year: int = DEFAULT_REFERENCE_YEAR,
    ):
        self._source = MonthArticlesSource(client)
        self._popup = popup
        self._navigator = navigator
        self._year = year
        self._month = validate_month(month)
        self._static = static
        self._reference_year = reference_year
        self._phase = GridPhase.IDLE
        self._articles: Tuple[ArticleSummary, ...] = ()
        self._view: Optional[MonthGridView] = None

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def static(self) -> bool:
        return self._static

    @property
    def phase(self) -> GridPhase:
        return self._phase

    @property
    def articles(self) -> Tuple[ArticleSummary, ...]:
        return self._articles

    @property
    def view(self) -> Optional[MonthGridView]:
        return self._view

    # =========================================================================
    # LOADING
    # =========================================================================

    async def load(self) -> LoadOutcome:
        self._phase = GridPhase.LOADING
        outcome = await self._source.load(self._year, self._month)
        if outcome is LoadOutcome.SUPERSEDED:
            return outcome
        self._articles = self._source.articles
        self.render()
        return outcome

    async def set_year(self, year: int) -> LoadOutcome:
        """External year change (year switcher)."""
        self._year = year
        return await self.load()

    async def navigate(self, scope: NavScope, direction: Direction) -> LoadOutcome:
        if scope is NavScope.MONTH:
            self._year, self._month = shift_month(self._year, self._month, direction.sign)
        else:
            self._year += direction.sign
        return await self.load()

    # =========================================================================
    # RENDERING
    # =========================================================================

    def articles_for_day(self, day: int) -> List[ArticleSummary]:
        return [a for a in self._articles if a.day == day]

    def render(self) -> MonthGridView:
        blanks = first_day_of_week(self._year, self._month, self._reference_year)
        cells: List[GridCell] = [GridCell(day=None) for _ in range(blanks)]
        for day in range(1, days_in_month(self._month) + 1):
            cells.append(GridCell(
                day=day,
                article_count=len(self.articles_for_day(day)),
                target=DayCell(self._year, self._month, day),
            ))

        self._view = MonthGridView(
            year=self._year,
            month=self._month,
            title=month_title(self._month, self._year),
            cells=tuple(cells),
            nav_buttons=() if self._static else _NAV_BUTTONS,
        )
        self._phase = GridPhase.RENDERED
        return self._view

    # =========================================================================
    # EVENTS
    # =========================================================================

    async def handle(self, event: PointerEvent) -> EventResult:
        target = event.target

        if isinstance(target, NavButton):
            if self._static or event.kind is not PointerKind.CLICK:
                return IGNORED
            await self.navigate(target.scope, target.direction)
            return EventResult(handled=True, prevent_default=True)

        if isinstance(target, DayCell):
            # Leaving always reaches the popup, even after a year or month change.
            if event.kind is PointerKind.LEAVE:
                self._popup.leave_source(event.related)
                return EventResult(handled=True)
            if (target.year, target.month) != (self._year, self._month):
                return IGNORED
            return self._handle_day(target, event)

        return IGNORED

    def _handle_day(self, cell: DayCell, event: PointerEvent) -> EventResult:
        if event.kind is PointerKind.CLICK:
            url = day_url(cell.year, cell.month, cell.day)
            self._navigator.go(url)
            return EventResult(handled=True, navigated_to=url)

        if event.kind is PointerKind.ENTER:
            articles = self.articles_for_day(cell.day)
            if not articles:
                return IGNORED
            self._popup.enter_source(
                PopupRequest(cell.year, cell.month, cell.day),
                event.anchor or Rect(0, 0, 0, 0),
                articles,
            )
            return EventResult(handled=True)

        return IGNORED
