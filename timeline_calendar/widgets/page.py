"""
Page Assembly

Builds the widgets of one timeline page around shared collaborators and
initialises them in dependency order:

1. Year switcher (decides the year)
2. Month grids (loaded for that year)
3. Sparkline strips

One day popup and one month popup exist per page; every grid shares the
day popup and every sparkline shares the month popup.
"""

from __future__ import annotations
import asyncio
from typing import List, Mapping, Optional, Tuple, Union

from ..access.client import ArticleStoreClient
from ..config import TimelineConfig
from ..contracts.base import YearRange
from ..interaction.events import (
    EventResult, IGNORED, PointerEvent, PointerKind, PopupSurface, hit_test,
)
from ..interaction.geometry import Viewport
from ..interaction.popup import DAY_POPUP_ID, MONTH_POPUP_ID, PopupTimings, PreviewPopup
from ..navigation import AddressBar, Navigator
from ..temporal.calendar import centered_range
from ..temporal.scheduler import AsyncioScheduler, Scheduler
from .month_grid import MonthGrid
from .sparkline import SparklineStrip
from .year_switcher import YearSwitcher


Widget = Union[MonthGrid, SparklineStrip, YearSwitcher]


class TimelinePage:

    def __init__(
        self,
        client: ArticleStoreClient,
        config: Optional[TimelineConfig] = None,
        scheduler: Optional[Scheduler] = None,
        navigator: Optional[Navigator] = None,
        address_bar: Optional[AddressBar] = None,
        viewport: Optional[Viewport] = None,
    ):
        self.config = config or TimelineConfig()
        self.policy = self.config.policy()
        self.client = client
        self.navigator = navigator or Navigator()
        self.address_bar = address_bar or AddressBar()

        scheduler = scheduler or AsyncioScheduler()
        timings = PopupTimings.from_config(self.config)
        self.day_popup = PreviewPopup(DAY_POPUP_ID, scheduler, timings, viewport)
        self.month_popup = PreviewPopup(MONTH_POPUP_ID, scheduler, timings, viewport)

        self.grids: List[MonthGrid] = []
        self.sparklines: List[SparklineStrip] = []
        self.year_switcher: Optional[YearSwitcher] = None

    # =========================================================================
    # BUILDERS
    # =========================================================================

    def add_month_grid(self, year: int, month: int, static: bool = False) -> MonthGrid:
        grid = MonthGrid(
            self.client, self.day_popup, self.navigator,
            year=year, month=month, static=static,
            reference_year=self.policy.reference_year,
        )
        self.grids.append(grid)
        if self.year_switcher is not None and static:
            self.year_switcher.attach_grid(grid)
        return grid

    def add_sparkline(
        self,
        year_range: Optional[YearRange] = None,
        show_navigation: bool = True,
    ) -> SparklineStrip:
        strip = SparklineStrip(
            self.client, self.month_popup, self.navigator, self.policy,
            year_range=year_range,
            years_per_view=self.config.years_per_view,
            show_navigation=show_navigation,
        )
        self.sparklines.append(strip)
        return strip

    def add_sparkline_around(self, year: int) -> SparklineStrip:
        """Sparkline centred on a year/month/day/article page's year."""
        return self.add_sparkline(centered_range(year, self.policy))

    def add_year_view(self, year: Optional[int] = None) -> YearSwitcher:
        """Year switcher plus twelve static month grids kept in sync with it."""
        self.year_switcher = YearSwitcher(
            self.client, self.address_bar, self.policy, configured_year=year,
        )
        start_year = year if year is not None else 0
        for month in range(1, 13):
            self.add_month_grid(start_year, month, static=True)
        return self.year_switcher

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def start(self) -> None:
        synced: List[MonthGrid] = []
        loads = []
        if self.year_switcher is not None:
            await self.year_switcher.init()
            year = self.year_switcher.current_year
            synced = [grid for grid in self.grids if grid.static]
            loads.extend(grid.set_year(year) for grid in synced)
        loads.extend(grid.load() for grid in self.grids if grid not in synced)
        loads.extend(strip.load() for strip in self.sparklines)
        await asyncio.gather(*loads)

    async def dispatch(self, widget: Widget, event: PointerEvent) -> EventResult:
        """Route an event: popup surfaces to their popup, the rest to the widget."""
        if isinstance(event.target, PopupSurface):
            for popup in (self.day_popup, self.month_popup):
                if popup.popup_id == event.target.popup_id:
                    return popup.handle(event)
            return IGNORED
        return await widget.handle(event)

    async def dispatch_element(
        self,
        widget: Widget,
        kind: PointerKind,
        role: Optional[str],
        data: Optional[Mapping[str, str]] = None,
        related: Optional[Tuple[Optional[str], Optional[Mapping[str, str]]]] = None,
        **pointer,
    ) -> EventResult:
        """
        Dispatch a raw host event.

        role/data describe the element under the pointer; related is the
        (role, data) of the element the pointer moved to or came from.
        pointer carries the remaining PointerEvent fields (button, ctrl,
        meta, anchor).
        """
        event = PointerEvent(
            kind=kind,
            target=hit_test(role, data),
            related=hit_test(*related) if related is not None else None,
            **pointer,
        )
        return await self.dispatch(widget, event)
