"""
Year Switcher Widget

Horizontal strip of years that have content. Selecting a year highlights
it, centres it in the strip, records it in the address bar and pushes it
into every month grid on the page. Prev/next wrap at the ends of the
loaded list, not at policy bounds.
"""

from __future__ import annotations
import asyncio
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging

from ..access.client import ArticleStoreClient
from ..access.sources import YearListSource
from ..contracts.base import YearPolicy
from ..interaction.events import (
    Direction, EventResult, IGNORED, NavButton, NavScope, PointerEvent, PointerKind,
    YearLabel,
)
from ..navigation import AddressBar, YEAR_PARAM
from ..temporal.calendar import default_year
from .month_grid import MonthGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearItem:
    year: int
    label: str
    active: bool
    target: YearLabel


@dataclass(frozen=True)
class YearSwitcherView:
    current_year: int
    items: Tuple[YearItem, ...]
    scroll_left: float


class YearSwitcher:

    def __init__(
        self,
        client: ArticleStoreClient,
        address_bar: AddressBar,
        policy: YearPolicy,
        grids: Sequence[MonthGrid] = (),
        configured_year: Optional[int] = None,
        item_width: float = 60.0,
        strip_width: float = 600.0,
    ):
        self._source = YearListSource(client)
        self._address_bar = address_bar
        self._policy = policy
        self._grids: List[MonthGrid] = list(grids)
        self._configured_year = configured_year
        self._item_width = item_width
        self._strip_width = strip_width
        self._current_year = default_year(policy)
        self._view: Optional[YearSwitcherView] = None

    @property
    def current_year(self) -> int:
        return self._current_year

    @property
    def years(self) -> List[int]:
        return self._source.years

    @property
    def view(self) -> Optional[YearSwitcherView]:
        return self._view

    def attach_grid(self, grid: MonthGrid) -> None:
        self._grids.append(grid)

    async def init(self) -> YearSwitcherView:
        """
        Load the years once, then pick the initial year: address bar,
        else configured year, else the first loaded year.
        """
        await self._source.load(default_year(self._policy))
        years = self._source.years
        self._current_year = years[0] if years else default_year(self._policy)

        from_address = self._address_bar.get(YEAR_PARAM)
        if from_address is not None:
            try:
                self._current_year = int(from_address)
            except ValueError:
                logger.debug("Ignoring unparseable %s=%r", YEAR_PARAM, from_address)
        elif self._configured_year is not None:
            self._current_year = self._configured_year

        return self.render()

    async def select_year(self, year: int) -> YearSwitcherView:
        self._current_year = year
        view = self.render()
        self._address_bar.push(**{YEAR_PARAM: year})
        await asyncio.gather(*(grid.set_year(year) for grid in self._grids))
        return view

    async def step(self, direction: Direction) -> YearSwitcherView:
        years = self._source.years
        if not years:
            return self.render()
        index = years.index(self._current_year) if self._current_year in years else -1
        index += direction.sign
        if index < 0:
            index = len(years) - 1
        elif index >= len(years):
            index = 0
        return await self.select_year(years[index])

    def render(self) -> YearSwitcherView:
        years = self._source.years
        items = tuple(
            YearItem(year=y, label=str(y), active=y == self._current_year, target=YearLabel(y))
            for y in years
        )
        self._view = YearSwitcherView(
            current_year=self._current_year,
            items=items,
            scroll_left=self._scroll_for(years),
        )
        return self._view

    def _scroll_for(self, years: List[int]) -> float:
        if self._current_year not in years:
            return self._view.scroll_left if self._view else 0.0
        item_left = years.index(self._current_year) * self._item_width
        wanted = item_left - self._strip_width / 2 + self._item_width / 2
        limit = max(0.0, len(years) * self._item_width - self._strip_width)
        return max(0.0, min(wanted, limit))

    async def handle(self, event: PointerEvent) -> EventResult:
        if event.kind is not PointerKind.CLICK:
            return IGNORED
        if isinstance(event.target, YearLabel):
            await self.select_year(event.target.year)
            return EventResult(handled=True, prevent_default=True)
        if isinstance(event.target, NavButton) and event.target.scope is NavScope.YEAR:
            await self.step(event.target.direction)
            return EventResult(handled=True, prevent_default=True)
        return IGNORED
