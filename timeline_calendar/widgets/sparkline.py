"""
Sparkline Strip Widget
======================

Paged overview of per-month activity across consecutive years.

RULES:
======
- Paging shifts the window by years_per_view in either direction
- Backward paging is refused below the policy's minimum year
- Forward paging is refused when no loaded year beyond the window end
  has content (bounded by what has been fetched)
- Cell height scales against the maximum over the whole loaded dataset,
  including years not shown, so intensity is stable while paging
- Year zero is never rendered unless the policy allows it, whatever the
  store returned

A plain click on a month opens its preview popup; ctrl/cmd-click or a
non-primary button goes straight to the month page without suppressing
the host's default behaviour.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from ..access.client import ArticleStoreClient
from ..access.sources import LoadOutcome, MonthArticlesSource, RangeCountsSource
from ..contracts.base import MONTH_ABBREVIATIONS, YearPolicy, YearRange
from ..interaction.events import (
    Direction, EventResult, IGNORED, MonthCell, NavButton, NavScope,
    PointerEvent, PointerKind, YearLabel,
)
from ..interaction.geometry import Rect
from ..interaction.popup import PopupRequest, PreviewPopup
from ..navigation import Navigator, month_url, year_url
from ..temporal.calendar import (
    default_range, disallowed_year_tooltip, min_allowed_year,
)

logger = logging.getLogger(__name__)


MIN_HEIGHT = 8.0
MAX_HEIGHT = 80.0

NO_MORE_CONTENT_TOOLTIP = "No more content ahead"


def cell_height(count: int, global_max: int) -> float:
    if count <= 0 or global_max <= 0:
        return MIN_HEIGHT
    return MIN_HEIGHT + (count / global_max) * (MAX_HEIGHT - MIN_HEIGHT)


def month_tooltip(year: int, month: int, count: int) -> str:
    noun = "article" if count == 1 else "articles"
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}: {count} {noun}"


# =============================================================================
# VIEW CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class SparklineCell:
    year: int
    month: int
    count: int
    height: float
    interactive: bool
    tooltip: Optional[str]
    target: MonthCell


@dataclass(frozen=True)
class SparklineColumn:
    year: int
    label: str
    cells: Tuple[SparklineCell, ...]
    label_target: YearLabel


@dataclass(frozen=True)
class NavControl:
    button: NavButton
    enabled: bool
    tooltip: Optional[str]


@dataclass(frozen=True)
class SparklineView:
    """
    DETERMINISTIC:
    Same dataset + same window + same policy = identical view.
    """
    header: str
    range_label: Optional[str]
    columns: Tuple[SparklineColumn, ...]
    prev: Optional[NavControl]
    next: Optional[NavControl]
    global_max: int

    def column(self, year: int) -> Optional[SparklineColumn]:
        for col in self.columns:
            if col.year == year:
                return col
        return None


# =============================================================================
# WIDGET
# =============================================================================

class SparklineStrip:
    """
    Multi-year sparkline with paging and month previews.

    The fetched range extends lookahead_years past the visible window so
    the forward guard and intensity scaling see beyond the current page.
    """

    def __init__(
        self,
        client: ArticleStoreClient,
        popup: PreviewPopup,
        navigator: Navigator,
        policy: YearPolicy,
        year_range: Optional[YearRange] = None,
        years_per_view: int = 7,
        lookahead_years: Optional[int] = None,
        show_navigation: bool = True,
    ):
        if years_per_view < 1:
            raise ValueError(f"years_per_view must be >= 1, got {years_per_view}")
        self._range_source = RangeCountsSource(client)
        self._month_source = MonthArticlesSource(client)
        self._popup = popup
        self._navigator = navigator
        self._policy = policy
        self._year_range = year_range or default_range(policy)
        self._displayed_range: Optional[YearRange] = None
        self._years_per_view = years_per_view
        self._lookahead = years_per_view if lookahead_years is None else lookahead_years
        self._show_navigation = show_navigation
        self._view: Optional[SparklineView] = None

    @property
    def year_range(self) -> YearRange:
        return self._year_range

    @property
    def displayed_range(self) -> YearRange:
        return self._displayed_range or self._year_range

    @property
    def years_per_view(self) -> int:
        return self._years_per_view

    @property
    def dataset(self):
        return self._range_source.dataset

    @property
    def global_max(self) -> int:
        return self._range_source.global_max

    @property
    def view(self) -> Optional[SparklineView]:
        return self._view

    def fetch_range(self, window: YearRange) -> YearRange:
        return YearRange(window.start, window.end + self._lookahead)

    # =========================================================================
    # LOADING AND PAGING
    # =========================================================================

    async def load(self) -> LoadOutcome:
        window = self._year_range
        outcome = await self._range_source.load(self.fetch_range(window))
        if outcome is LoadOutcome.APPLIED:
            self._displayed_range = window
        elif outcome is LoadOutcome.FAILED:
            # Stale data stays on screen; the window follows it back.
            self._year_range = self.displayed_range
            logger.warning(
                "Range counts unavailable for %s..%s; keeping years %s..%s",
                window.start, window.end, self._year_range.start, self._year_range.end,
            )
        if outcome is not LoadOutcome.SUPERSEDED:
            self.render()
        return outcome

    def can_navigate(self, direction: Direction) -> bool:
        if direction is Direction.PREV:
            return self._year_range.start - self._years_per_view >= min_allowed_year(self._policy)
        return self._range_source.dataset.has_content_after(self._year_range.end)

    async def navigate(self, direction: Direction) -> bool:
        if not self.can_navigate(direction):
            logger.debug("Refusing %s paging from %s", direction.value, self._year_range)
            return False
        self._year_range = self._year_range.shifted(direction.sign * self._years_per_view)
        await self.load()
        return True

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render(self) -> SparklineView:
        window = self.displayed_range
        dataset = self._range_source.dataset
        global_max = self._range_source.global_max

        columns: List[SparklineColumn] = []
        for year, months in dataset:
            if not window.contains(year):
                continue
            if year == 0 and not self._policy.allow_year_zero:
                continue
            cells = []
            for month in range(1, 13):
                count = months[month]
                cells.append(SparklineCell(
                    year=year,
                    month=month,
                    count=count,
                    height=cell_height(count, global_max),
                    interactive=count > 0,
                    tooltip=month_tooltip(year, month, count) if count > 0 else None,
                    target=MonthCell(year, month),
                ))
            columns.append(SparklineColumn(
                year=year,
                label=f"Year {year}",
                cells=tuple(cells),
                label_target=YearLabel(year),
            ))

        if self._show_navigation:
            header = "Timeline Overview"
            range_label = f"Years {self._year_range.start} - {self._year_range.end}"
            prev_control = self._nav_control(Direction.PREV)
            next_control = self._nav_control(Direction.NEXT)
        else:
            header = f"Year {self._year_range.start} Overview"
            range_label = None
            prev_control = next_control = None

        self._view = SparklineView(
            header=header,
            range_label=range_label,
            columns=tuple(columns),
            prev=prev_control,
            next=next_control,
            global_max=global_max,
        )
        return self._view

    def _nav_control(self, direction: Direction) -> NavControl:
        enabled = self.can_navigate(direction)
        tooltip = None
        if not enabled:
            if direction is Direction.PREV:
                tooltip = disallowed_year_tooltip(self._year_range.start - self._years_per_view)
            else:
                tooltip = NO_MORE_CONTENT_TOOLTIP
        return NavControl(NavButton(direction, NavScope.RANGE), enabled, tooltip)

    def count_for(self, year: int, month: int) -> int:
        months = self._range_source.dataset.get(year)
        return months[month] if months is not None else 0

    # =========================================================================
    # MONTH PREVIEW
    # =========================================================================

    async def open_month(self, year: int, month: int, anchor: Rect) -> LoadOutcome:
        """Show the month popup at once (loading), then fill it when fetched."""
        request = PopupRequest(year, month)
        self._popup.enter_source(request, anchor)
        outcome = await self._month_source.load(year, month)
        if outcome is LoadOutcome.APPLIED:
            self._popup.deliver(request, self._month_source.articles)
        return outcome

    # =========================================================================
    # EVENTS
    # =========================================================================

    async def handle(self, event: PointerEvent) -> EventResult:
        target = event.target

        if isinstance(target, NavButton):
            if not self._show_navigation or event.kind is not PointerKind.CLICK:
                return IGNORED
            moved = await self.navigate(target.direction)
            return EventResult(handled=moved, prevent_default=True)

        if isinstance(target, YearLabel):
            if event.kind is not PointerKind.CLICK:
                return IGNORED
            url = year_url(target.year)
            self._navigator.go(url)
            return EventResult(handled=True, navigated_to=url)

        if isinstance(target, MonthCell):
            return await self._handle_month(target, event)

        return IGNORED

    async def _handle_month(self, cell: MonthCell, event: PointerEvent) -> EventResult:
        # Leaving always reaches the popup, even if the cell changed under the pointer.
        if event.kind is PointerKind.LEAVE:
            self._popup.leave_source(event.related)
            return EventResult(handled=True)

        if self.count_for(cell.year, cell.month) <= 0:
            return IGNORED
        if cell.year == 0 and not self._policy.allow_year_zero:
            return IGNORED

        if event.kind is PointerKind.CONTEXT_MENU:
            return EventResult(handled=False, prevent_default=False)

        if event.kind in (PointerKind.CLICK, PointerKind.AUX_CLICK):
            if event.kind is PointerKind.AUX_CLICK or event.opens_new_context:
                url = month_url(cell.year, cell.month)
                self._navigator.go(url)
                return EventResult(handled=True, prevent_default=False, navigated_to=url)
            await self.open_month(cell.year, cell.month, event.anchor or Rect(0, 0, 0, 0))
            return EventResult(handled=True, prevent_default=True)

        if event.kind is PointerKind.ENTER:
            await self.open_month(cell.year, cell.month, event.anchor or Rect(0, 0, 0, 0))
            return EventResult(handled=True)

        return IGNORED
